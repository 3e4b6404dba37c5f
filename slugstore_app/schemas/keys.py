from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class KeyInfo(BaseModel):
    """A single entry of a key listing"""
    name: str
    expiration: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None


class KeyListPage(BaseModel):
    """
    One page of a key listing, in the key-value backend's native shape.
    
    cursor is opaque and only present while list_complete is False.
    Pass it back unchanged to fetch the next page.
    """
    keys: List[KeyInfo] = Field(default_factory=list)
    list_complete: bool = True
    cursor: Optional[str] = None
