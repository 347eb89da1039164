"""
Resume Content Structure

Typed representation of the document stored in resumes.content.

Stored documents use camelCase keys:

    {
        "personalInfo": {"fullName": "", "email": "", "phone": "", "location": "", "summary": ""},
        "experience": [{"id": "...", "company": "", "position": "", "startDate": "", "endDate": "", "description": ""}],
        "education": [{"id": "...", "school": "", "degree": "", "startDate": "", "endDate": "", "description": ""}],
        "skills": ["Python", "SQL"]
    }

ResumeContent.from_dict() is the only way documents enter the application: it
fills absent sub-structures with their empty defaults, gives id-less entries a
fresh id, drops unknown keys, and rejects values of the wrong type.
"""

import copy
import uuid
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from resumekit.contexts.store.exceptions import InvalidContentError


def new_entry_id() -> str:
    """Generate a unique identifier for an experience or education entry."""
    return str(uuid.uuid4())


def to_camel(name: str) -> str:
    """Convert a snake_case attribute name to its stored camelCase key."""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _read_text(data: Dict[str, Any], key: str, path: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidContentError(
            f"Expected text, got {type(value).__name__}", path=f"{path}.{key}"
        )
    return value


def _read_mapping(value: Any, path: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidContentError(f"Expected an object, got {type(value).__name__}", path=path)
    return value


def _read_sequence(value: Any, path: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidContentError(f"Expected a list, got {type(value).__name__}", path=path)
    return value


class _TextRecord:
    """Mixin for flat records whose non-id fields are all free text."""

    @classmethod
    def text_fields(cls) -> List[str]:
        """Attribute names of the editable text fields (everything but id)."""
        return [f.name for f in fields(cls) if f.name != "id"]

    @classmethod
    def resolve_field(cls, name: str) -> str:
        """
        Map a field name in either spelling to its attribute name.

        Accepts "start_date" or "startDate".

        Raises:
            ValueError: If name is not an editable field of this record
        """
        for attr in cls.text_fields():
            if name in (attr, to_camel(attr)):
                return attr
        raise ValueError(f"Unknown {cls.__name__} field: {name}")

    @classmethod
    def from_dict(cls, data: Any, path: str):
        data = _read_mapping(data, path)
        values = {attr: _read_text(data, to_camel(attr), path) for attr in cls.text_fields()}
        if any(f.name == "id" for f in fields(cls)):
            entry_id = data.get("id")
            if entry_id is not None and not isinstance(entry_id, str):
                raise InvalidContentError("Entry id must be text", path=f"{path}.id")
            values["id"] = entry_id or new_entry_id()
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return {to_camel(f.name): getattr(self, f.name) for f in fields(self)}


@dataclass
class PersonalInfo(_TextRecord):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""


@dataclass
class ExperienceEntry(_TextRecord):
    """
    A single job. Dates are free text ("YYYY-MM"); an empty end_date means current.
    """
    id: str = field(default_factory=new_entry_id)
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""


@dataclass
class EducationEntry(_TextRecord):
    id: str = field(default_factory=new_entry_id)
    school: str = ""
    degree: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""


def _read_entries(value: Any, entry_cls, path: str) -> list:
    entries = []
    seen_ids = set()
    for index, item in enumerate(_read_sequence(value, path)):
        entry = entry_cls.from_dict(item, f"{path}[{index}]")
        if entry.id in seen_ids:
            raise InvalidContentError(f"Duplicate entry id {entry.id}", path=f"{path}[{index}].id")
        seen_ids.add(entry.id)
        entries.append(entry)
    return entries


@dataclass
class ResumeContent:
    """
    Normalized resume content.

    Every sub-structure is always present; an empty resume is
    ResumeContent() with five empty personal-info strings and empty lists.

    Attributes:
        personal_info: Contact details and summary
        experience: Jobs in insertion order, addressable by entry id
        education: Schools in insertion order, addressable by entry id
        skills: Free-text skills, addressable by position
    """
    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    experience: List[ExperienceEntry] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ResumeContent":
        """
        Build normalized content from a stored (camelCase) document.

        Args:
            data: Stored document; None or {} yields empty content

        Returns:
            ResumeContent with every sub-structure filled

        Raises:
            InvalidContentError: If any value has the wrong type
        """
        data = _read_mapping(data, "content")

        skills = _read_sequence(data.get("skills"), "skills")
        for index, skill in enumerate(skills):
            if not isinstance(skill, str):
                raise InvalidContentError(
                    f"Expected text, got {type(skill).__name__}", path=f"skills[{index}]"
                )

        return cls(
            personal_info=PersonalInfo.from_dict(data.get("personalInfo"), "personalInfo"),
            experience=_read_entries(data.get("experience"), ExperienceEntry, "experience"),
            education=_read_entries(data.get("education"), EducationEntry, "education"),
            skills=list(skills),
        )

    @classmethod
    def coerce(cls, content: Any) -> "ResumeContent":
        """Accept either a ResumeContent or a stored document and return normalized content."""
        if isinstance(content, cls):
            # Round-trip so ids and types are re-validated
            return cls.from_dict(content.to_dict())
        return cls.from_dict(content)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored camelCase document."""
        return {
            "personalInfo": self.personal_info.to_dict(),
            "experience": [entry.to_dict() for entry in self.experience],
            "education": [entry.to_dict() for entry in self.education],
            "skills": list(self.skills),
        }

    def copy(self) -> "ResumeContent":
        return copy.deepcopy(self)

    @property
    def is_empty(self) -> bool:
        return self == ResumeContent()
