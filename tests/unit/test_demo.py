import pytest

from delegate_proxy.demo import (
    Cell,
    EditingStyle,
    IndexPath,
    SampleTableController,
    TableView,
    build_parser,
    main,
)
from delegate_proxy.proxy import InterceptingProxy
from delegate_proxy.recorder import MemoryRecorder


class MinimalSource:
    """Implements only the required data source methods."""

    def number_of_rows(self, table_view, section):
        return 2

    def cell_for_row(self, table_view, index_path):
        return Cell("plain", f"{index_path.row}")


class TestReloadThroughProxy:
    def test_call_order_for_first_section(self, table, recorder):
        table.reload_data()
        assert recorder.methods()[:11] == [
            "number_of_sections",
            "section_index_titles",
            "height_for_header",
            "height_for_footer",
            "number_of_rows",
            "title_for_header",
            "view_for_header",
            "height_for_row",
            "cell_for_row",
            "indentation_level_for_row",
            "will_display_cell",
        ]

    def test_every_row_gets_a_cell(self, table, recorder):
        cells = table.reload_data()
        assert [cell.text for cell in cells] == [
            f"Section {section}, row {row}" for section in range(2) for row in range(3)
        ]
        assert recorder.methods().count("cell_for_row") == 6

    def test_arguments_are_snapshotted(self, table, recorder):
        table.reload_data()
        described = [record.describe() for record in recorder.records]
        assert "number_of_sections()" in described
        assert "number_of_rows(1)" in described
        assert "cell_for_row({1, 2})" in described

    def test_proxy_matches_direct_results(self, controller):
        direct = TableView(data_source=controller, delegate=controller).reload_data()
        recorder = MemoryRecorder()
        proxy = InterceptingProxy.create(SampleTableController(sections=2, rows=3), recorder=recorder)
        proxied = TableView(data_source=proxy, delegate=proxy).reload_data()
        assert proxied == direct

    def test_optional_methods_are_skipped_when_target_lacks_them(self):
        recorder = MemoryRecorder()
        proxy = InterceptingProxy.create(MinimalSource(), recorder=recorder)
        table = TableView(data_source=proxy, delegate=proxy)

        cells = table.reload_data()

        assert len(cells) == 2
        assert recorder.methods() == ["number_of_rows", "cell_for_row", "cell_for_row"]


class TestInteractions:
    def test_select_row(self, table, recorder):
        chosen = table.select_row(IndexPath(0, 1))
        assert chosen == IndexPath(0, 1)
        assert recorder.methods() == ["will_select_row", "did_select_row"]
        # the controller deselects right away
        assert table.selected is None

    def test_reselect_deselects_previous(self):
        class Sticky(SampleTableController):
            def did_select_row(self, table_view, index_path):
                pass

        recorder = MemoryRecorder()
        proxy = InterceptingProxy.create(Sticky(), recorder=recorder)
        table = TableView(data_source=proxy, delegate=proxy)
        table.select_row(IndexPath(0, 0))
        table.select_row(IndexPath(0, 1))
        assert recorder.methods() == [
            "will_select_row",
            "did_select_row",
            "will_select_row",
            "will_deselect_row",
            "did_deselect_row",
            "did_select_row",
        ]
        assert table.selected == IndexPath(0, 1)

    def test_delete_row(self, table, controller, recorder):
        assert table.delete_row(IndexPath(1, 0))
        assert controller.row_counts == [3, 2]
        assert recorder.methods() == [
            "can_edit_row",
            "will_begin_editing_row",
            "should_indent_while_editing",
            "editing_style_for_row",
            "title_for_delete_confirmation",
            "commit_editing",
            "did_end_editing_row",
        ]
        commit = recorder.records[5]
        assert commit.args[1] is EditingStyle.DELETE

    def test_move_row_between_sections(self, table, controller, recorder):
        destination = table.move_row(IndexPath(0, 0), IndexPath(1, 0))
        assert destination == IndexPath(1, 0)
        assert controller.row_counts == [2, 4]
        assert recorder.methods() == ["can_move_row", "target_index_path_for_move", "move_row"]

    def test_accessory_tap(self, table, recorder):
        table.tap_accessory(IndexPath(0, 0))
        assert recorder.methods() == ["accessory_button_tapped"]

    def test_section_for_index_title(self, proxy, table):
        assert proxy.section_for_index_title(table, "4", 4) == 4


class TestCommandLine:
    def test_parser_reads_index_paths(self):
        args = build_parser().parse_args(["--select", "2,1"])
        assert args.select == IndexPath(2, 1)

    def test_parser_rejects_bad_index_path(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--select", "two"])

    def test_main_prints_call_order(self, tmp_path, capsys):
        exit_code = main(
            [
                "--sections", "1",
                "--rows", "1",
                "--select", "0,0",
                "--env-file", str(tmp_path / "absent.env"),
            ]
        )
        assert exit_code == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["1", "number_of_sections()"]
        assert any(line.endswith("cell_for_row({0, 0})") for line in lines)
        assert lines[-1].endswith("did_select_row({0, 0})")
