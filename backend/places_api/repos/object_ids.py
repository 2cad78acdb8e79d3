from bson import ObjectId

def to_object_id(value) -> ObjectId | None:
    """Parse a path/claim id into an ObjectId, or None when it cannot be one."""
    if isinstance(value, ObjectId):
        return value
    if value is None or not ObjectId.is_valid(str(value)):
        return None
    return ObjectId(str(value))
