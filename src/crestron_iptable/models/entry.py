from __future__ import annotations

from pydantic import BaseModel, Field


class IPTableEntry(BaseModel):
    """A single IP table row: a CIP_ID mapped to an address within a program slot.

    The descriptive fields (type, status, model_name, description) are only
    ever filled from processor output. They are excluded from serialized
    output, as is room_id.
    """

    model_config = {"populate_by_name": True, "protected_namespaces": ()}

    cip_id: int = Field(default=0, alias="CIP_ID")
    ip_address: str = Field(default="", alias="IPAddress")
    port: int = Field(default=0, alias="Port")
    device_id: int = Field(default=0, alias="DeviceID")
    program_slot: int = Field(default=0, alias="ProgramSlot")
    room_id: str = Field(default="", exclude=True)

    type: str = Field(default="", exclude=True)
    status: str = Field(default="", exclude=True)
    model_name: str = Field(default="", exclude=True)
    description: str = Field(default="", exclude=True)

    def copy_values_from(self, other: IPTableEntry) -> None:
        self.cip_id = other.cip_id
        self.ip_address = other.ip_address
        self.device_id = other.device_id
        self.program_slot = other.program_slot
        self.model_name = other.model_name
        self.port = other.port
        self.description = other.description
        self.room_id = other.room_id
        self.status = other.status
        self.type = other.type

    def __str__(self) -> str:
        return (
            f"ProgramID - {self.program_slot}, CIP_ID - {self.cip_id:X}, "
            f"IPAddress - '{self.ip_address}', Port - {self.port}, "
            f"RoomID - '{self.room_id}', DeviceID - {self.device_id:X}, "
            f"Type - '{self.type}', Status - '{self.status}', "
            f"ModelName - '{self.model_name}', Description - '{self.description}'"
        )
