"""A small table view host to watch delegate call order.

``TableView`` drives its ``data_source`` and ``delegate`` the way a list UI
does: it asks for counts, titles and heights, builds cells and reports
selection and editing. ``SampleTableController`` implements both roles.
Running ``python -m delegate_proxy`` wires the two together through an
:class:`~delegate_proxy.proxy.InterceptingProxy` and prints every call the
table makes.
"""

from __future__ import annotations

import argparse
import enum
import logging
import sys
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from .config import ProxyConfig
from .recorder import FanoutRecorder, LoggingRecorder, MemoryRecorder
from .wiring import intercepting

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Table primitives
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class IndexPath:
    section: int
    row: int


class EditingStyle(enum.Enum):
    NONE = "none"
    DELETE = "delete"
    INSERT = "insert"


@dataclass
class Cell:
    reuse_identifier: str
    text: str = ""


class TableView:
    """Host that calls into a data source and a delegate.

    Optional methods are looked up with ``hasattr`` before they are called,
    and a sensible default is used when the collaborator lacks them.
    """

    DEFAULT_ROW_HEIGHT = 44.0
    DEFAULT_SECTION_HEIGHT = 22.0

    def __init__(self, data_source: Any = None, delegate: Any = None) -> None:
        self.data_source = data_source
        self.delegate = delegate
        self.selected: Optional[IndexPath] = None
        self.cells: List[Cell] = []
        self._reusable: List[Cell] = []

    # Collaborator helpers -------------------------------------------------

    @staticmethod
    def _ask(collaborator: Any, name: str, *args: Any, default: Any = None) -> Any:
        if collaborator is None or not hasattr(collaborator, name):
            return default
        return getattr(collaborator, name)(*args)

    def dequeue_reusable_cell(self, identifier: str) -> Optional[Cell]:
        for index, cell in enumerate(self._reusable):
            if cell.reuse_identifier == identifier:
                return self._reusable.pop(index)
        return None

    # Loading --------------------------------------------------------------

    def number_of_sections(self) -> int:
        return self._ask(self.data_source, "number_of_sections", self, default=1)

    def number_of_rows(self, section: int) -> int:
        return self.data_source.number_of_rows(self, section)

    def reload_data(self) -> List[Cell]:
        """Ask for every section and row and build the visible cells."""

        self._reusable.extend(self.cells)
        self.cells = []

        section_height = self.DEFAULT_SECTION_HEIGHT
        sections = self.number_of_sections()
        self._ask(self.data_source, "section_index_titles", self)
        for section in range(sections):
            self._ask(self.delegate, "height_for_header", self, section, default=section_height)
            self._ask(self.delegate, "height_for_footer", self, section, default=section_height)
            rows = self.number_of_rows(section)
            self._ask(self.data_source, "title_for_header", self, section)
            self._ask(self.delegate, "view_for_header", self, section)
            for row in range(rows):
                index_path = IndexPath(section, row)
                self._ask(
                    self.delegate,
                    "height_for_row",
                    self,
                    index_path,
                    default=self.DEFAULT_ROW_HEIGHT,
                )
                cell = self.data_source.cell_for_row(self, index_path)
                self._ask(self.delegate, "indentation_level_for_row", self, index_path)
                self._ask(self.delegate, "will_display_cell", self, cell, index_path)
                self.cells.append(cell)
            self._ask(self.data_source, "title_for_footer", self, section)
            self._ask(self.delegate, "view_for_footer", self, section)
        logger.debug(f"Loaded {len(self.cells)} cells in {sections} sections")
        return self.cells

    # Selection ------------------------------------------------------------

    def select_row(self, index_path: IndexPath) -> Optional[IndexPath]:
        chosen = self._ask(
            self.delegate, "will_select_row", self, index_path, default=index_path
        )
        if chosen is None:
            return None
        if self.selected is not None and self.selected != chosen:
            self.user_deselect_row(self.selected)
        self.selected = chosen
        self._ask(self.delegate, "did_select_row", self, chosen)
        return chosen

    def user_deselect_row(self, index_path: IndexPath) -> None:
        chosen = self._ask(
            self.delegate, "will_deselect_row", self, index_path, default=index_path
        )
        if chosen is None:
            return
        self.selected = None
        self._ask(self.delegate, "did_deselect_row", self, chosen)

    def deselect_row(self, index_path: IndexPath) -> None:
        """Programmatic deselection; the delegate is not told."""

        if self.selected == index_path:
            self.selected = None

    def tap_accessory(self, index_path: IndexPath) -> None:
        self._ask(self.delegate, "accessory_button_tapped", self, index_path)

    # Editing --------------------------------------------------------------

    def delete_row(self, index_path: IndexPath) -> bool:
        if not self._ask(self.data_source, "can_edit_row", self, index_path, default=True):
            return False
        self._ask(self.delegate, "will_begin_editing_row", self, index_path)
        self._ask(self.delegate, "should_indent_while_editing", self, index_path)
        style = self._ask(
            self.delegate,
            "editing_style_for_row",
            self,
            index_path,
            default=EditingStyle.DELETE,
        )
        self._ask(self.delegate, "title_for_delete_confirmation", self, index_path)
        self._ask(self.data_source, "commit_editing", self, style, index_path)
        self._ask(self.delegate, "did_end_editing_row", self, index_path)
        return True

    def move_row(self, source: IndexPath, proposed: IndexPath) -> Optional[IndexPath]:
        if not self._ask(self.data_source, "can_move_row", self, source, default=False):
            return None
        destination = self._ask(
            self.delegate,
            "target_index_path_for_move",
            self,
            source,
            proposed,
            default=proposed,
        )
        self._ask(self.data_source, "move_row", self, source, destination)
        return destination


# ---------------------------------------------------------------------------
# Sample controller
# ---------------------------------------------------------------------------


class SampleTableController:
    """Implements both the data source and the delegate role."""

    CELL_IDENTIFIER = "Cell"

    def __init__(self, sections: int = 25, rows: int = 5) -> None:
        self.row_counts = [rows] * sections

    # Data source

    def number_of_sections(self, table_view):
        return len(self.row_counts)

    def number_of_rows(self, table_view, section):
        return self.row_counts[section]

    def section_index_titles(self, table_view):
        return [str(section) for section in range(len(self.row_counts))]

    def section_for_index_title(self, table_view, title, index):
        return int(title)

    def cell_for_row(self, table_view, index_path):
        cell = table_view.dequeue_reusable_cell(self.CELL_IDENTIFIER)
        if cell is None:
            cell = Cell(self.CELL_IDENTIFIER)
        cell.text = f"Section {index_path.section}, row {index_path.row}"
        return cell

    def title_for_header(self, table_view, section):
        return f"Header for section {section}"

    def title_for_footer(self, table_view, section):
        return f"Footer for section {section}"

    def can_edit_row(self, table_view, index_path):
        return True

    def can_move_row(self, table_view, index_path):
        return True

    def commit_editing(self, table_view, editing_style, index_path):
        if editing_style is EditingStyle.DELETE:
            self.row_counts[index_path.section] -= 1
        elif editing_style is EditingStyle.INSERT:
            self.row_counts[index_path.section] += 1

    def move_row(self, table_view, source, destination):
        if source.section != destination.section:
            self.row_counts[source.section] -= 1
            self.row_counts[destination.section] += 1

    # Delegate

    def height_for_row(self, table_view, index_path):
        return 44.0

    def height_for_header(self, table_view, section):
        return 20.0

    def height_for_footer(self, table_view, section):
        return 20.0

    def view_for_header(self, table_view, section):
        return None

    def view_for_footer(self, table_view, section):
        return None

    def indentation_level_for_row(self, table_view, index_path):
        return 0

    def will_display_cell(self, table_view, cell, index_path):
        pass

    def will_select_row(self, table_view, index_path):
        return index_path

    def did_select_row(self, table_view, index_path):
        table_view.deselect_row(index_path)

    def will_deselect_row(self, table_view, index_path):
        return index_path

    def did_deselect_row(self, table_view, index_path):
        pass

    def accessory_button_tapped(self, table_view, index_path):
        pass

    def editing_style_for_row(self, table_view, index_path):
        return EditingStyle.DELETE

    def title_for_delete_confirmation(self, table_view, index_path):
        return "Delete"

    def should_indent_while_editing(self, table_view, index_path):
        return True

    def will_begin_editing_row(self, table_view, index_path):
        pass

    def did_end_editing_row(self, table_view, index_path):
        pass

    def target_index_path_for_move(self, table_view, source, proposed):
        return proposed


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------


def _index_path(value: str) -> IndexPath:
    try:
        section, row = (int(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected SECTION,ROW, got '{value}'") from None
    return IndexPath(section, row)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="delegate_proxy",
        description="Print the data source and delegate calls a table view makes.",
    )
    parser.add_argument("--sections", type=int, default=3)
    parser.add_argument("--rows", type=int, default=2)
    parser.add_argument("--select", type=_index_path, metavar="SECTION,ROW")
    parser.add_argument("--delete", type=_index_path, metavar="SECTION,ROW")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = ProxyConfig.from_env(env_file=args.env_file)
    if args.log_level:
        config = ProxyConfig.model_validate(
            {**config.model_dump(), "log_level": args.log_level}
        )
    logging.basicConfig(
        level=config.level if args.log_level else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    memory = MemoryRecorder()
    recorder = FanoutRecorder(LoggingRecorder(config.logger(), config.level), memory)

    controller = SampleTableController(sections=args.sections, rows=args.rows)
    table = TableView()
    with intercepting(table, controller, recorder=recorder, config=config):
        table.reload_data()
        if args.select is not None:
            table.select_row(args.select)
        if args.delete is not None:
            table.delete_row(args.delete)

    for number, record in enumerate(memory.records, start=1):
        print(f"{number:4d}  {record.describe()}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
