"""Pytest configuration and fixtures."""
import os
import uuid
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Ensure the application uses a dedicated SQLite database during tests
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["ENVIRONMENT"] = "test"
os.environ["OPENAI_API_KEY"] = ""
os.environ["BCRYPT_ROUNDS"] = "4"

from inquiro.config import get_settings
from inquiro.database import enable_sqlite_foreign_keys
from inquiro.models.base import SurveyStatus, UserRole


BASE_DIR = Path(__file__).resolve().parent.parent
TEST_DB_PATH = BASE_DIR / "test.db"
TEST_PASSWORD = "TestPassword123"
settings = get_settings()


@pytest.fixture(scope="session", autouse=True)
def apply_migrations():
    """Apply database migrations against the test database."""
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()

    alembic_cfg = AlembicConfig(str(BASE_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    command.upgrade(alembic_cfg, "head")

    yield

    if TEST_DB_PATH.exists():
        try:
            TEST_DB_PATH.unlink()
        except PermissionError:
            # On Windows, database might still be in use
            pass


@pytest.fixture
async def test_engine():
    """Create test database engine using the same database as migrations."""
    engine = create_async_engine(
        settings.database_url,
        echo=False,
        pool_pre_ping=True,
    )
    enable_sqlite_foreign_keys(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()
        await session.close()


@pytest.fixture
def session_factory(test_engine):
    """Independent sessions on the test database, one per simulated request."""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_app(test_engine):
    """Create test app with database override."""
    from inquiro.main import app
    from inquiro.database import get_db

    async def override_get_db():
        async_session = async_sessionmaker(
            test_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        async with async_session() as session:
            try:
                yield session
            finally:
                await session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def user_factory(db_session):
    """Factory for creating test users with default credentials."""
    from inquiro.services import UserService

    user_service = UserService(db_session)

    async def _create_user(
        role: UserRole = UserRole.RESPONDENT,
        email: str | None = None,
        password: str = TEST_PASSWORD,
        name: str = "Test User",
    ):
        # Unique emails keep tests independent on the shared database
        if email is None:
            email = f"user_{uuid.uuid4().hex[:10]}@example.com"
        return await user_service.register_user(
            email=email, password=password, name=name, role=role
        )

    return _create_user


@pytest.fixture
async def creator(user_factory):
    return await user_factory(role=UserRole.CREATOR, name="Survey Creator")


@pytest.fixture
async def other_creator(user_factory):
    return await user_factory(role=UserRole.CREATOR, name="Other Creator")


@pytest.fixture
async def respondent(user_factory):
    return await user_factory(role=UserRole.RESPONDENT, name="Respondent")


@pytest.fixture
def auth_headers():
    """Build a Bearer header for a user without going through /auth/login."""
    from inquiro.services.auth_service import AuthService

    def _headers(user):
        token, _ = AuthService(None).create_access_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def survey_factory(db_session):
    """Create a survey owned by ``owner`` with optional questions, optionally published."""
    from inquiro.schemas.question import OptionCreate, QuestionCreate
    from inquiro.schemas.survey import SurveyCreate
    from inquiro.services import QuestionService, SurveyService
    from inquiro.models.base import QuestionType

    async def _create_survey(
        owner,
        *,
        questions: list[QuestionCreate] | None = None,
        publish: bool = False,
        **survey_fields,
    ):
        survey_fields.setdefault("title", f"Survey {uuid.uuid4().hex[:6]}")
        survey = await SurveyService(db_session).create_survey(SurveyCreate(**survey_fields), owner)
        if questions is None and publish:
            questions = [
                QuestionCreate(text="How are you?", type=QuestionType.TEXT, is_required=True, order=1),
                QuestionCreate(
                    text="Pick a colour",
                    type=QuestionType.RADIO,
                    order=2,
                    options=[
                        OptionCreate(text="Red", order=1),
                        OptionCreate(text="Blue", order=2),
                    ],
                ),
            ]
        for question in questions or []:
            await QuestionService(db_session).add_question(survey.id, question, owner)
        if publish:
            await SurveyService(db_session).publish_survey(survey.id, owner)
        survey = await SurveyService(db_session).get_survey_by_id(survey.id, owner)
        assert survey.status == (SurveyStatus.PUBLISHED if publish else SurveyStatus.DRAFT)
        return survey

    return _create_survey
