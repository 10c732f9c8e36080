import uuid
from types import SimpleNamespace
from unittest.mock import create_autospec

import pytest
from fakeredis import FakeAsyncRedis, FakeServer
from fastapi.testclient import TestClient

from studyatlas.db.interfaces.postgresql import PostgreSQLDatabase
from studyatlas.dependencies import get_database, get_gateway_client, get_redis
from studyatlas.main import app
from studyatlas.models import (
    Course,
    Lab,
    Program,
    Teacher,
    Topic,
    University,
    course_programs,
    course_topics,
    course_universities,
    lab_universities,
)
from studyatlas.services.gateway.client import GatewayClient

USER_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
OTHER_USER_ID = uuid.UUID("22222222-2222-2222-2222-222222222222")


def auth_headers(user_id: uuid.UUID = USER_ID) -> dict:
    return {"X-User-Id": str(user_id)}


@pytest.fixture
def database():
    db = PostgreSQLDatabase("sqlite://")
    db.create_all()
    yield db
    db.teardown()


@pytest.fixture
def redis_server():
    return FakeServer()


@pytest.fixture
def gateway():
    return create_autospec(GatewayClient, instance=True)


@pytest.fixture
def client(database, redis_server, gateway):
    async def override_redis():
        redis_client = FakeAsyncRedis(server=redis_server, decode_responses=True)
        try:
            yield redis_client
        finally:
            await redis_client.aclose()

    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_redis] = override_redis
    app.dependency_overrides[get_gateway_client] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def catalog(database):
    """Two universities with a handful of courses, labs, a program and teachers."""
    epfl = University(id=uuid.uuid4(), name="EPFL", slug="epfl", country="Switzerland", country_code="CH")
    ethz = University(id=uuid.uuid4(), name="ETH Zurich", slug="eth-zurich", country="Switzerland", country_code="CH")

    cs_master = Program(
        id=uuid.uuid4(),
        university_id=epfl.id,
        name="Computer Science Master",
        slug="epfl-cs-master",
        level="Ma",
        ects_total=120,
    )

    machine_learning = Course(
        id=uuid.uuid4(),
        code="CS-433",
        name="Machine Learning",
        description="Supervised and unsupervised learning",
        ects=8,
        language="English",
        term="Winter",
        level="Ma",
        professor_name="Martin Jaggi",
        topics="Machine Learning, Statistics",
        exam_type="Written",
        mandatory_optional="Optional",
        software_equipment="Python; PyTorch",
        which_year="MA1",
    )
    algorithms = Course(
        id=uuid.uuid4(),
        code="CS-250",
        name="Algorithms",
        ects=6,
        language="English",
        term="Winter",
        level="Ba",
        professor_name="Ola Svensson",
        topics="Algorithms",
        exam_type="Oral",
        mandatory_optional="Mandatory",
        which_year="BA3",
    )
    analysis = Course(
        id=uuid.uuid4(),
        code="MATH-101",
        name="Analyse I",
        ects=4,
        language="French",
        term="Summer",
        level="Ba",
        topics="Mathematics",
        exam_type="During the semester",
        mandatory_optional="Mandatory",
        software_equipment="Matlab",
        which_year="BA1",
    )

    mlo = Lab(
        id=uuid.uuid4(),
        name="Machine Learning and Optimization Laboratory",
        slug="mlo",
        topics="optimization, machine learning",
        faculty_area="Computer Science",
    )
    robotics = Lab(
        id=uuid.uuid4(),
        name="Robotic Systems Lab",
        slug="robotic-systems-lab",
        topics="legged robots",
        faculty_area="Mechanical Engineering",
    )

    jaggi = Teacher(
        id=uuid.uuid4(),
        full_name="Martin Jaggi",
        name="Jaggi",
        email="martin.jaggi@epfl.ch",
        h_index=45,
        topics=["Machine Learning", "Optimization"],
    )
    flammarion = Teacher(id=uuid.uuid4(), full_name="Nicolas Flammarion", topics=["Machine Learning"])

    with database.get_session() as session:
        session.add_all([epfl, ethz])
        session.flush()
        session.add_all([cs_master, machine_learning, algorithms, analysis, mlo, robotics])
        session.add_all(
            [
                Topic(name="Machine Learning"),
                Topic(name="Algorithms"),
                Topic(name="Mathematics"),
                jaggi,
                flammarion,
            ]
        )
        session.flush()
        session.execute(
            course_universities.insert(),
            [
                {"course_id": machine_learning.id, "university_id": epfl.id},
                {"course_id": algorithms.id, "university_id": epfl.id},
                {"course_id": analysis.id, "university_id": ethz.id},
            ],
        )
        session.execute(course_programs.insert(), [{"course_id": machine_learning.id, "program_id": cs_master.id}])
        session.execute(
            course_topics.insert(),
            [
                {"course_id": machine_learning.id, "topic_name": "Machine Learning"},
                {"course_id": algorithms.id, "topic_name": "Algorithms"},
                {"course_id": analysis.id, "topic_name": "Mathematics"},
            ],
        )
        session.execute(
            lab_universities.insert(),
            [
                {"lab_id": mlo.id, "university_id": epfl.id},
                {"lab_id": robotics.id, "university_id": ethz.id},
            ],
        )
        session.commit()

    return SimpleNamespace(
        epfl=epfl,
        ethz=ethz,
        cs_master=cs_master,
        machine_learning=machine_learning,
        algorithms=algorithms,
        analysis=analysis,
        mlo=mlo,
        robotics=robotics,
        jaggi=jaggi,
        flammarion=flammarion,
    )
