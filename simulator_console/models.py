"""
Simulator Console
Pydantic models for the cm-simulator wire format
"""

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from simulator_console.config import SUCCESS_CODE


class WireModel(BaseModel):
    """Base for upstream records: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Enums
class DeviceState(str, Enum):
    ON_LINE = "ON_LINE"
    OFF_LINE = "OFF_LINE"
    MAINTENANCE = "MAINTENANCE"


class CoordinateKind(str, Enum):
    LON = "lon"
    LAT = "lat"


# Envelope
class ApiEnvelope(BaseModel):
    """Uniform response envelope returned by the upstream and the proxy."""

    code: str
    msg: str = ""
    data: Any = None
    cause: Optional[str] = None

    @field_validator("code", mode="before")
    @classmethod
    def _code_as_text(cls, value: Any) -> str:
        return str(value)

    @field_validator("msg", mode="before")
    @classmethod
    def _msg_as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @property
    def ok(self) -> bool:
        return self.code == SUCCESS_CODE

    def error_message(self, fallback: str) -> str:
        """Human readable failure text, falling back when msg is blank."""
        return self.msg or fallback

    @classmethod
    def failure(cls, message: str, data: Any = None) -> "ApiEnvelope":
        return cls(code="500", msg=message, data=data, cause=None)


# Pagination
class PageQuery(WireModel):
    """Page query relayed to the upstream queryPage endpoints."""

    page_num: int = Field(ge=1)
    page_size: int = Field(gt=0)
    instance_id: Optional[Union[int, str]] = None

    def to_wire(self) -> dict:
        """Serialize, omitting the owner field when it is absent or blank."""
        body = {"pageNum": self.page_num, "pageSize": self.page_size}
        if self.instance_id is not None and self.instance_id != "":
            body["instanceId"] = self.instance_id
        return body


class PageResult(BaseModel):
    total: int = 0
    items: List[Any] = Field(default_factory=list, alias="list")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("items", mode="before")
    @classmethod
    def _null_list_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


# Instance Models
class SimulatorInstance(WireModel):
    id: int
    http_port: Optional[int] = None
    http_ip: Optional[str] = None
    enable: bool = True
    remark: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None


class InstanceCreate(WireModel):
    http_ip: str = Field(min_length=1, description="Instance IP address")
    http_port: int = Field(default=80, ge=1, le=65535)
    enable: bool = True
    remark: Optional[str] = None


class InstanceEdit(InstanceCreate):
    id: int


# Dependent Models
class SimulatorDevice(WireModel):
    """Master-station board attached to an instance."""

    id: int
    instance_id: int
    device: Optional[int] = None
    version: Optional[str] = None
    state: Optional[str] = None
    remark: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None


class SimulatorStation(WireModel):
    """Terminal station (rcst) attached to an instance."""

    id: int
    instance_id: int
    mac: Optional[str] = None
    terminal_no: Optional[int] = None
    code: Optional[str] = None
    gateway: Optional[str] = None
    ip: Optional[str] = None
    mask: Optional[str] = None
    model: Optional[str] = None
    version: Optional[str] = None
    modem_lon: float = 0.0
    modem_lon_dir: int = 0
    modem_lat: float = 0.0
    modem_lat_dir: int = 0
    sate_lon: float = 0.0
    sate_lon_dir: int = 0
    sate_lat: float = 0.0
    sate_lat_dir: int = 0
    height: float = 0.0
    create_time: Optional[str] = None
    update_time: Optional[str] = None
