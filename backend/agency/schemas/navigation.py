"""Navigation, tab and dashboard card schemas."""
from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel


class WorkflowSection(str, Enum):
    """Sections of the client detail view."""
    PR = "pr"
    MARKET_RESEARCH = "market_research"
    CREATIVE = "creative"
    CONTENT = "content"


class NavLink(BaseModel):
    """Sidebar navigation entry."""
    path: str
    label: str
    icon: str


class TabOption(BaseModel):
    """Client list tab."""
    value: str
    label: str


class NavigationResponse(BaseModel):
    """Navigation bundle for the current user."""
    role: Optional[str] = None
    links: List[NavLink]
    tabs: List[TabOption]
    default_tab: Optional[str] = None


class StatCard(BaseModel):
    """Dashboard statistic.

    ``is_placeholder`` marks values that are not computed from data.
    """
    key: str
    label: str
    value: Union[int, str]
    is_placeholder: bool = False
