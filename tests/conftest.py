"""
Shared fixtures: sample bowlers and an in-memory roster database.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bowling_lab.database import init_db
from bowling_lab.engine.profile import BowlerProfile
from bowling_lab.engine.taxonomy import Arm, Archetype


def make_bowler(bowler_id="b1", archetype=Archetype.FAST, arm=Arm.RIGHT, strengths=None, strategies=None, **extra):
    return BowlerProfile(
        id=bowler_id,
        name=extra.pop("name", bowler_id.replace("_", " ").title()),
        arm=arm,
        archetype=archetype,
        strengths=strengths or [],
        strategies=strategies or [],
        **extra,
    )


@pytest.fixture
def pace_bowler():
    return make_bowler(
        "bumrah", Archetype.FAST,
        strengths=["Accurate yorkers", "Skiddy bouncer"],
        strategies=["Hard length to set up, then the surprise yorker."],
        team="Mumbai Titans", country="India", formats=["T20I", "ODI", "Test"],
    )


@pytest.fixture
def finger_spinner():
    return make_bowler(
        "ashwin", Archetype.OFF_SPIN,
        strengths=["Carrom ball", "Arm-ball variation"],
        team="Chennai Kings", country="India", formats=["Test"],
    )


@pytest.fixture
def wrist_spinner():
    return make_bowler(
        "chahal", Archetype.LEG_SPIN,
        strengths=["Deceptive googly", "Big-turning leg-break"],
        team="Rajasthan Royals XI", country="India", formats=["T20I", "ODI"],
    )


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(bind=db_engine)()
    try:
        yield session
    finally:
        session.close()
