"""
Registry files are decoded into subclasses of pydantic's `BaseModel` before any check runs.
Distribution and merkle tree records keep the raw JSON value of each field, so that the
validators can report bad values instead of failing on them.

Validators return tuples of `Issue`, use `str(issue)` for the printable message.
"""

from registry_validator.models.Chain import *
from registry_validator.models.Distribution import *
from registry_validator.models.Issue import *
from registry_validator.models.MerkleTree import *
from registry_validator.models.Record import *
from registry_validator.models.types import *
