"""
Data Models
===========
Data structures exchanged with the Logflare API.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, StrictStr

JSONValue = Union[
    None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"]
]

# Events are schema-less; any JSON-serializable mapping is accepted.
LogEvent = dict[str, JSONValue]


class LogflareResponse(BaseModel):
    """Successful response from the ingestion endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: StrictStr
