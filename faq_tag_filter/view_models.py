"""Models for filter dropdowns and the rendered list state."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .models import CategoryNode


class DropdownDisplay(Enum):
    """Display states of a filter dropdown."""
    PLACEHOLDER = "placeholder"
    SELECTED = "selected"


@dataclass
class FilterOption:
    """One selectable category in a dropdown."""

    name: str
    full_path: str
    level: int
    has_children: bool
    count: int

    @classmethod
    def from_node(cls, node: CategoryNode) -> "FilterOption":
        return cls(
            name=node.name,
            full_path=node.full_path,
            level=node.level,
            has_children=node.has_children,
            count=node.count,
        )


@dataclass
class FilterLevel:
    """State of the dropdown shown for one hierarchy depth."""

    level: int
    parent_path: str
    options: List[FilterOption] = field(default_factory=list)
    label: str = ""
    selected_path: Optional[str] = None
    is_open: bool = False

    @property
    def display(self) -> DropdownDisplay:
        if self.selected_path:
            return DropdownDisplay.SELECTED
        return DropdownDisplay.PLACEHOLDER

    def option_for(self, path: str) -> Optional[FilterOption]:
        """Find the option with the given full path."""
        for option in self.options:
            if option.full_path == path:
                return option
        return None

    @property
    def selected_option(self) -> Optional[FilterOption]:
        if not self.selected_path:
            return None
        return self.option_for(self.selected_path)

    def to_dict(self) -> dict:
        """Convert level to dictionary (for serialization)."""
        return {
            "level": self.level,
            "parent_path": self.parent_path,
            "label": self.label,
            "display": self.display.value,
            "selected_path": self.selected_path,
            "is_open": self.is_open,
            "options": [
                {
                    "name": o.name,
                    "full_path": o.full_path,
                    "level": o.level,
                    "has_children": o.has_children,
                    "count": o.count,
                }
                for o in self.options
            ],
        }


@dataclass
class ViewState:
    """Everything the renderer needs to draw the entry list."""

    visible: Dict[str, bool] = field(default_factory=dict)
    no_results: bool = False
    no_results_message: str = ""
    active_entry_id: Optional[str] = None
    query: str = ""
    suggestions: List[str] = field(default_factory=list)
    suggestions_visible: bool = False

    @property
    def visible_count(self) -> int:
        return sum(1 for shown in self.visible.values() if shown)
