from pydantic import BaseModel, ConfigDict


class WriteModel(BaseModel):
    """Attribute map accepted by the upsert encoder.

    Unknown keys are rejected so a misspelled column never reaches the store.
    """
    model_config = ConfigDict(extra="forbid")
