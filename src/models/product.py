"""Product model for flat-file storage."""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Set

# Fields that must be truthy when a product is created.
REQUIRED_TRUTHY_FIELDS = ("title", "description", "price", "thumbnail", "code")

# Fields that must be present on creation but may hold a falsy value (stock=0).
REQUIRED_PRESENT_FIELDS = ("stock",)


class ProductFormatError(ValueError):
    """Raised when a stored record cannot be turned into a Product."""

    pass


@dataclass
class Product:
    """Product data model representing one stored record.

    Unknown keys read from storage or passed in a patch are kept in ``extra``
    and written back after the known fields. Known fields stored as null are
    listed in ``nulls`` so they are written back as null rather than dropped.
    """

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    thumbnail: Optional[str] = None
    code: Optional[str] = None
    stock: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    nulls: Set[str] = field(default_factory=set)

    @classmethod
    def field_names(cls) -> List[str]:
        """Known field names in serialization order."""
        return [f.name for f in fields(cls) if f.name not in ("extra", "nulls")]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Product":
        """Build a Product from a stored mapping.

        Raises:
            ProductFormatError: If the mapping is not a dict or has no integer id.
        """
        if not isinstance(data, Mapping):
            raise ProductFormatError(f"Product record must be an object, got {type(data).__name__}")

        record_id = data.get("id")
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            raise ProductFormatError(f"Product record has no integer id: {record_id!r}")

        known = cls.field_names()
        values = {name: data[name] for name in known if name in data}
        extra = {key: value for key, value in data.items() if key not in known}
        nulls = {name for name, value in values.items() if value is None}
        return cls(**values, extra=extra, nulls=nulls)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain mapping, omitting known fields that were never set."""
        data: Dict[str, Any] = {"id": self.id}
        for name in self.field_names():
            if name == "id":
                continue
            value = getattr(self, name)
            if value is not None or name in self.nulls:
                data[name] = value
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    def merged(self, patch: Mapping[str, Any]) -> "Product":
        """Return a copy with ``patch`` applied; the id never changes."""
        data = self.to_dict()
        data.update(patch)
        data["id"] = self.id
        return Product.from_dict(data)


def missing_required_fields(candidate: Mapping[str, Any]) -> List[str]:
    """List required fields that are absent or empty in a creation candidate."""
    missing = [name for name in REQUIRED_TRUTHY_FIELDS if not candidate.get(name)]
    missing.extend(name for name in REQUIRED_PRESENT_FIELDS if candidate.get(name) is None)
    return missing
