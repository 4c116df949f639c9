"""Example: use the EAV repository and catalog services directly.

Goal: show the data-access contract without any web layer.
"""

from config import load_settings

from campus_catalog.container import build_container


def main():
    settings = load_settings()
    container = build_container(db_config=settings.DB_CONFIG)
    repo = container.courses_repo

    entity_id = repo.create_entity("Widget")
    repo.set_entity_attributes(
        entity_id,
        {
            "price": {"value": 9.99, "type": "number"},
            "active": {"value": True, "type": "boolean"},
        },
    )
    print(repo.get_entity_by_id(entity_id))
    print([c.name for c in container.course_service.list_courses(search="fall")[0]])

    repo.delete_entity(entity_id)


if __name__ == "__main__":
    main()
