from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class IssueKind(str, Enum):
    """
    :kind PARSE: the file could not be read or decoded, no further checks ran
    :kind SCHEMA: a required field is missing
    :kind FORMAT: a field is present but its value has the wrong format
    :kind CONSISTENCY: two fields, or two files, disagree
    :kind STRUCTURAL: a collection breaks a shape invariant
    """

    PARSE = "parse"
    SCHEMA = "schema"
    FORMAT = "format"
    CONSISTENCY = "consistency"
    STRUCTURAL = "structural"


class Issue(BaseModel):
    """
    A single problem found in a registry file
    :param `kind`: category of the problem
    :param `message`: human readable description, printed by the CLI
    :param `field`: dotted path of the offending field, if there is one
    """

    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    message: str
    field: Optional[str] = None

    def __str__(self) -> str:
        return self.message
