import uuid

from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String, Table, Text, Uuid

from studyatlas.db.interfaces.postgresql import Base

course_universities = Table(
    "course_universities",
    Base.metadata,
    Column("course_id", Uuid, ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("university_id", Uuid, ForeignKey("universities.id", ondelete="CASCADE"), primary_key=True),
)

course_programs = Table(
    "course_programs",
    Base.metadata,
    Column("course_id", Uuid, ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("program_id", Uuid, ForeignKey("programs.id", ondelete="CASCADE"), primary_key=True),
)

course_topics = Table(
    "course_topics",
    Base.metadata,
    Column("course_id", Uuid, ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("topic_name", String, ForeignKey("topics.name", ondelete="CASCADE"), primary_key=True),
)

lab_universities = Table(
    "lab_universities",
    Base.metadata,
    Column("lab_id", Uuid, ForeignKey("labs.id", ondelete="CASCADE"), primary_key=True),
    Column("university_id", Uuid, ForeignKey("universities.id", ondelete="CASCADE"), primary_key=True),
)


class University(Base):
    __tablename__ = "universities"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False, index=True)
    slug = Column(String, nullable=False, unique=True, index=True)
    country = Column(String, nullable=True)
    country_code = Column(String(2), nullable=True)
    website = Column(String, nullable=True)
    logo_url = Column(String, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)


class Program(Base):
    __tablename__ = "programs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    university_id = Column(Uuid, ForeignKey("universities.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    level = Column(String(2), nullable=True)
    ects_total = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)


class Course(Base):
    __tablename__ = "courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(String, nullable=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    ects = Column(Float, nullable=True)
    language = Column(String, nullable=True)
    term = Column(String, nullable=True)
    level = Column(String(2), nullable=True)
    professor_name = Column(String, nullable=True)
    year = Column(String, nullable=True)
    # Comma separated, as shipped by the catalog import
    topics = Column(Text, nullable=True)
    exam_type = Column(String, nullable=True)
    mandatory_optional = Column(String, nullable=True)
    software_equipment = Column(Text, nullable=True)
    which_year = Column(String, nullable=True)


class Lab(Base):
    __tablename__ = "labs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False, index=True)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    professors = Column(Text, nullable=True)
    topics = Column(Text, nullable=True)
    faculty_area = Column(String, nullable=True)
    link = Column(String, nullable=True)
    image_url = Column(String, nullable=True)


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(String, nullable=False, index=True)
    # Last name as printed in course listings
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    h_index = Column(Integer, nullable=True)
    citations = Column(Integer, nullable=True)
    topics = Column(JSON, nullable=False, default=list)


class Topic(Base):
    __tablename__ = "topics"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False, unique=True)
    description = Column(Text, nullable=True)
