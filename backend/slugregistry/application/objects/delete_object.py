from slugregistry.application.slugs.registry import get_registry
from slugregistry.models.data_object import DataObject
from slugregistry.utils.transaction import transactional


def delete_object(
    *,
    object_id: int,
    hard: bool = False,
) -> int:
    """
    Delete an object and every slug it owns.

    Notes:
    - Slugs are removed by the registry; the database has no cascade
    - Returns the number of slug rows removed
    """

    obj = DataObject.query.filter_by(id=object_id).first()

    if not obj or obj.is_deleted:
        raise ValueError("Object not found")

    with transactional():
        if hard:
            DataObject.query.filter_by(id=object_id).delete(synchronize_session=False)
        else:
            obj.soft_delete()

    return get_registry().delete_all_for_record(object_id)
