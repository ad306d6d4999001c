"""
Wire models for the file operations service.

Every successful response is a ResponseEnvelope. Its `data` field holds one of
the payload shapes below, selected per endpoint.
"""

from typing import Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileContentData(CamelModel):
    """Payload of /readFile"""
    file_content: str


class FileEntry(CamelModel):
    """One directory child returned by /listFiles"""
    file_name: str
    size: int  # bytes


class OutboundRequest(CamelModel):
    """JSON body of /proxy"""
    url: Optional[str] = None
    method: Optional[str] = None  # GET when empty
    headers: Optional[Dict[str, List[str]]] = None
    body: Optional[str] = None
    timeout_seconds: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("timeoutSeconds", "timeout", "timeout_seconds"),
    )


class OutboundResponse(CamelModel):
    """Upstream result relayed by /proxy"""
    status_code: int
    headers: Dict[str, List[str]]
    body: str


EnvelopeData = Union[FileContentData, List[FileEntry], OutboundResponse, None]


class ResponseEnvelope(CamelModel):
    """Uniform success response"""
    message: str
    server_id: str
    request_id: str
    data: EnvelopeData = None
