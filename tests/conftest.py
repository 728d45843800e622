import os
from typing import Generator
import pytest
from unittest.mock import Mock
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient
from faker import Faker

# Keep application startup away from the on-disk default database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from main import app
from models.base import Base
from models import Post
from db.session import get_db
from repositories.post_meta_repository import PostMetaRepository
from repositories.post_repository import PostRepository
from services.permission_service import CapabilityChecker, get_current_user_can
from services.quick_edit_registry import QuickEditRegistry

fake = Faker()

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={
        "check_same_thread": False,
    },
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a test database session."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def registry() -> QuickEditRegistry:
    """A fresh registry, also installed on the app for API tests."""
    registry = QuickEditRegistry()
    app.state.quick_edit_registry = registry
    return registry


@pytest.fixture
def editor_can() -> CapabilityChecker:
    """Permission oracle for a user who may edit posts and manage options."""
    return CapabilityChecker({"edit_posts", "manage_options"})


@pytest.fixture(scope="function")
def client(db_session: Session, registry: QuickEditRegistry, editor_can) -> Generator[TestClient, None, None]:
    """Create a test client with database session and permission overrides."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user_can] = lambda: editor_can
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def post_repository(db_session: Session) -> PostRepository:
    return PostRepository(db_session)


@pytest.fixture
def meta_repository(db_session: Session) -> PostMetaRepository:
    return PostMetaRepository(db_session)


@pytest.fixture
def sample_post(post_repository: PostRepository) -> Post:
    """Create a sample post of type 'post'."""
    return post_repository.create("post", title=fake.sentence())


@pytest.fixture
def sample_download(post_repository: PostRepository) -> Post:
    """Create a sample post of type 'download'."""
    return post_repository.create("download", title=fake.sentence())


@pytest.fixture
def mock_meta_repository():
    """Mock metadata store."""
    return Mock(spec=PostMetaRepository)


@pytest.fixture
def mock_post_repository():
    """Mock post lookup that reports every post as a 'post'."""
    mock_repo = Mock(spec=PostRepository)
    mock_repo.get_post_type.return_value = "post"
    return mock_repo
