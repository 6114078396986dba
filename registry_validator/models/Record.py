from pydantic import BaseModel, ConfigDict


class JsonRecord(BaseModel):
    """
    Base class for records decoded from registry JSON files.

    Fields hold the raw JSON value so that a wrongly typed field can be reported
    rather than failing the decode. Keys we don't know about are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    def has(self, field: str) -> bool:
        """True if the key was in the source document, even if its value was null"""
        return field in self.model_fields_set

    def present(self, field: str) -> bool:
        """True if the key was in the source document with a non-null value"""
        return self.has(field) and getattr(self, field) is not None
