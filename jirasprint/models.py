"""
Data models for the Jira sprint helper.

Domain values are immutable snapshots of what Jira returned. Responses are
pydantic models validated with model_validate; the search response needs
the custom field ids as validation context:

    SearchResponse.model_validate(data, context={'fields': FieldMapping()})

Request bodies are plain dataclasses serialized with to_dict().
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Dict, Any, Tuple

from pydantic import (
    AliasPath,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .auth import FieldMapping


# ============================================================================
# Domain values
# ============================================================================

class Sprint(BaseModel):
    """Represents a Jira Software sprint"""
    id: StrictInt
    name: StrictStr
    state: StrictStr

    model_config = ConfigDict(frozen=True)


class IssueFields(BaseModel):
    """The subset of issue fields the helper requests"""
    summary: StrictStr = ""
    issue_type: StrictStr = Field("", validation_alias=AliasPath('issuetype', 'name'))
    status: StrictStr = Field("", validation_alias=AliasPath('status', 'name'))
    points: Decimal = Decimal(0)
    sprints: Tuple[Sprint, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode='before')
    @classmethod
    def _read_custom_fields(cls, data: Any, info: ValidationInfo) -> Any:
        """Copy the site's points and sprint custom fields onto points/sprints"""
        if not isinstance(data, dict):
            return data
        fields = (info.context or {}).get('fields', FieldMapping())
        data = dict(data)
        data.setdefault('points', data.get(fields.points))
        data.setdefault('sprints', data.get(fields.sprints))
        return data

    @field_validator('summary', 'issue_type', 'status', mode='before')
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator('points', mode='before')
    @classmethod
    def _points(cls, value: Any) -> Decimal:
        if value is None:
            return Decimal(0)
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueError(f"expected a number, got {type(value).__name__}")
        points = Decimal(str(value))
        if not points.is_finite():
            raise ValueError(f"expected a finite number, got {value!r}")
        return points

    @field_validator('sprints', mode='before')
    @classmethod
    def _sprints(cls, value: Any) -> Any:
        if value is None:
            return ()
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"expected a list, got {type(value).__name__}")
        return value


class Issue(BaseModel):
    """Represents a Jira issue assigned to the current user"""
    key: StrictStr
    fields: IssueFields

    model_config = ConfigDict(frozen=True)


class Transition(BaseModel):
    """A workflow transition currently available for one issue"""
    id: StrictStr
    to_status: StrictStr = Field(validation_alias=AliasPath('to', 'name'))

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ============================================================================
# Request bodies
# ============================================================================

@dataclass(frozen=True)
class SearchRequest:
    """Body of POST /rest/api/3/search/jql"""
    jql: str
    fields: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {'jql': self.jql, 'fields': list(self.fields)}


@dataclass(frozen=True)
class TransitionRequest:
    """Body of POST /rest/api/3/issue/{key}/transitions"""
    transition_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {'transition': {'id': self.transition_id}}


@dataclass(frozen=True)
class SprintIssuesRequest:
    """Body of POST /rest/agile/1.0/sprint/{id}/issue"""
    issues: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {'issues': list(self.issues)}


# ============================================================================
# Response bodies
# ============================================================================

class SearchResponse(BaseModel):
    """Response of the assigned-issues search"""
    issues: List[Issue]

    model_config = ConfigDict(frozen=True)


class TransitionsResponse(BaseModel):
    """Response of GET /rest/api/3/issue/{key}/transitions"""
    transitions: List[Transition]

    model_config = ConfigDict(frozen=True)
