from __future__ import annotations

from dataclasses import dataclass

from .core.constants import COURSE_ATTRIBUTE_DESCRIPTIONS, DEFAULT_POOL_SIZE, SUBJECT_ATTRIBUTE_DESCRIPTIONS
from .courses.service import CourseCatalogService
from .database.connection import DBConfig, DatabaseConnection
from .eav.codec_factory import ValueCodecFactory
from .eav.descriptions import AttributeDescriber
from .eav.model import COURSE_TABLES, SUBJECT_TABLES
from .eav.mysql_eav_repository import MySQLEavRepository
from .subjects.service import SubjectCatalogService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    courses_repo: MySQLEavRepository
    subjects_repo: MySQLEavRepository

    course_service: CourseCatalogService
    subject_service: SubjectCatalogService


def build_container(*, db_config: dict) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", DEFAULT_POOL_SIZE)),
    )
    conn = DatabaseConnection.get_instance(config)
    codecs = ValueCodecFactory()

    courses_repo = MySQLEavRepository(
        conn,
        COURSE_TABLES,
        describer=AttributeDescriber(COURSE_ATTRIBUTE_DESCRIPTIONS, fallback_template="Course attribute: {words}"),
        codecs=codecs,
    )
    subjects_repo = MySQLEavRepository(
        conn,
        SUBJECT_TABLES,
        describer=AttributeDescriber(SUBJECT_ATTRIBUTE_DESCRIPTIONS, fallback_template="Subject attribute: {words}"),
        codecs=codecs,
    )

    return Container(
        conn=conn,
        courses_repo=courses_repo,
        subjects_repo=subjects_repo,
        course_service=CourseCatalogService(courses_repo),
        subject_service=SubjectCatalogService(subjects_repo),
    )
