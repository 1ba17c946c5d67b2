"""
VSRAdmin Backend - Instruction Schemas
=======================================

What:  Free-text instructions attached to a restaurant (1:N by CustomerID).
Who:   ReqInput is the body of POST /api/Instruction; Instruction is returned
       by both POST and GET /api/Instruction.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReqInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_id: int = Field(alias="CustomerID", ge=1)
    instruction: str = Field(alias="Instruction", min_length=1, max_length=4000)
    created_by: str | None = Field(default=None, alias="CreatedBy", max_length=150)


class Instruction(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    instruction_id: int = Field(alias="InstructionID")
    customer_id: int = Field(alias="CustomerID")
    instruction: str = Field(alias="Instruction")
    created_by: str | None = Field(default=None, alias="CreatedBy")
    created_at: datetime = Field(alias="CreatedAt")
