"""
Read-only course snapshot handed out by the course selector
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class CourseSummary:
    """Immutable view of one course row"""
    id: int
    shortname: str
    fullname: str
    visible: bool = True
    sortorder: int = 0
    category: int = 0
    groupmode: int = 0
    groupmodeforce: int = 0
    idnumber: str = ""
    startdate: int = 0
    extra: Mapping[str, Any] = field(default_factory=dict)  # additionally requested fields

    def __post_init__(self):
        object.__setattr__(self, 'extra', MappingProxyType(dict(self.extra)))

    @classmethod
    def from_row(cls, row):
        """Build a summary from a mapping of column name to value"""
        values = dict(row)
        known = {name: values.pop(name) for name in cls.core_fields() if name in values}
        known['visible'] = bool(known.get('visible', True))
        return cls(extra=values, **known)

    @staticmethod
    def core_fields():
        return ('id', 'shortname', 'fullname', 'visible', 'sortorder', 'category',
                'groupmode', 'groupmodeforce', 'idnumber', 'startdate')

    def get(self, name, default=None):
        if name in self.core_fields():
            return getattr(self, name)
        return self.extra.get(name, default)

    def to_dict(self):
        d = {name: getattr(self, name) for name in self.core_fields()}
        d.update(self.extra)
        return d
