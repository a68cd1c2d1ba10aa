from .uuid_factory import deterministic_uuid, uuid_for_pointer, uuid_for_relationship

__all__ = ["deterministic_uuid", "uuid_for_pointer", "uuid_for_relationship"]
