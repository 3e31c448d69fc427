import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from api.dependencies import get_classifier, get_upload_store
from db.database import get_session
from db.models import DrugRecord
from main import app
from services.classifier import Classifier, Prediction
from services.uploads import UploadStore


class FakeClassifier(Classifier):
    """Returns a canned prediction (or raises a canned error) and records calls."""

    def __init__(self, prediction=None, error=None):
        self.prediction = prediction or Prediction()
        self.error = error
        self.calls = []

    async def predict(self, image_bytes, filename, content_type=None):
        self.calls.append(filename)
        if self.error is not None:
            raise self.error
        return self.prediction


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded(session):
    session.add_all([
        DrugRecord(
            name="Paracetamol", size="500 mg", type="Tablet",
            purpose="Meredakan demam dan nyeri", dosage="3x1 tablet sehari",
            how_to_use="Diminum setelah makan", side_effects="Mual, Ruam kulit",
            warnings="Jangan melebihi dosis",
        ),
        DrugRecord(
            name="Bio Paracetamol", type="Sirup",
            purpose="Meredakan demam pada anak", dosage="3x1 sendok takar",
        ),
        DrugRecord(
            name="Amoxicillin", size="500 mg", type="Kapsul",
            purpose="Antibiotik untuk infeksi bakteri", dosage="3x1 kapsul sehari",
            side_effects="Diare",
        ),
    ])
    session.commit()
    return session


@pytest.fixture
def classifier():
    return FakeClassifier(Prediction(label="Paracetamol", confidence=0.92))


@pytest.fixture
def upload_store(tmp_path):
    return UploadStore(tmp_path / "uploads", "/uploads")


@pytest.fixture
def client(engine, classifier, upload_store):
    def override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_classifier] = lambda: classifier
    app.dependency_overrides[get_upload_store] = lambda: upload_store
    yield TestClient(app)
    app.dependency_overrides.clear()
