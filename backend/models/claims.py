from pydantic import BaseModel, ConfigDict, Field

class VerifyRequest(BaseModel):
    """Request body for the verification endpoints.

    Emptiness and length are checked by the endpoint so that the caller gets
    a 400 with a readable message instead of a schema error.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "claim": "Emergency shelters are open at Central Hall"
            }
        }
    )

    claim: str = Field(..., description="The statement to fact-check, verbatim.")
