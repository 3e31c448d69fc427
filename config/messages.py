# User-facing messages (Indonesian)

HEALTH_OK = "MEDIVIZE Backend is running"

DRUG_NOT_FOUND = "Obat tidak ditemukan"
DRUG_NOT_FOUND_FOR_UPDATE = "Obat tidak ditemukan untuk diperbarui"
DRUG_NOT_FOUND_FOR_DELETE = "Obat tidak ditemukan untuk dihapus"
DRUG_ALREADY_EXISTS = "Obat dengan nama tersebut sudah ada"
DRUG_NEW_NAME_TAKEN = "Nama obat baru sudah digunakan oleh obat lain"
DRUG_REQUIRED_FIELDS = "Nama, kegunaan, dan dosis obat wajib diisi"
SEARCH_QUERY_EMPTY = "Query pencarian tidak boleh kosong"

DRUG_CREATED = "Obat berhasil ditambahkan"
DRUG_UPDATED = "Obat berhasil diperbarui"
DRUG_DELETED = "Obat berhasil dihapus"

LIST_FAILED = "Gagal mengambil data obat"
DETAIL_FAILED = "Gagal mengambil detail obat"
SEARCH_FAILED = "Gagal mencari obat"
CREATE_FAILED = "Gagal menambahkan obat"
UPDATE_FAILED = "Gagal memperbarui obat"
DELETE_FAILED = "Gagal menghapus obat"

IMAGE_MISSING = 'Gambar tidak ditemukan dalam permintaan. Pastikan field name adalah "image".'
IMAGE_BAD_TYPE = "Hanya file gambar (JPEG, JPG, PNG, WEBP) yang diizinkan"
IMAGE_TOO_LARGE = "Ukuran file terlalu besar. Maksimal 5MB."
CLASSIFY_FAILED = "Gagal memproses gambar secara keseluruhan."

ML_API_UNREACHABLE = "Gagal menghubungi layanan deteksi obat (ML API)."
ML_API_TIMEOUT = "Koneksi ke layanan deteksi obat (ML API) timeout."
ML_API_STATUS = "ML API Error: Status {status}"
ML_API_MESSAGE = "ML API Error: {message}"
ML_API_BAD_RESPONSE = "Respons layanan deteksi obat (ML API) tidak valid."

UNRECOGNIZED_DRUG = "Tidak Dikenali"

INVALID_REQUEST = "Data permintaan tidak valid"
ENDPOINT_NOT_FOUND = "Endpoint tidak ditemukan."
INTERNAL_ERROR = "Terjadi kesalahan internal server."
