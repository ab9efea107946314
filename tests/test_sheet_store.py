from unittest.mock import MagicMock

from sheet_store import SheetTab, col_letter, tab_range


def test_col_letter():
    assert col_letter(1) == "A"
    assert col_letter(7) == "G"
    assert col_letter(26) == "Z"
    assert col_letter(27) == "AA"


def test_tab_range_quotes_names():
    assert tab_range("Completed Tasks", "A1:G1") == "'Completed Tasks'!A1:G1"
    assert tab_range("Amy's", "A2:G") == "'Amy''s'!A2:G"


def make(values=None, titles=("Completed Tasks",)):
    svc = MagicMock()
    svc.spreadsheets().get().execute.return_value = {
        "sheets": [{"properties": {"title": t}} for t in titles]
    }
    svc.spreadsheets().values().get().execute.return_value = values if values is not None else {}
    return svc, SheetTab(svc, "sid", "Completed Tasks", 7)


def test_read_header_empty_sheet():
    _, tab = make({})
    assert tab.read_header() == []


def test_read_rows_range():
    svc, tab = make({"values": [["T1", "x"]]})
    assert tab.read_rows() == [["T1", "x"]]
    svc.spreadsheets().values().get.assert_called_with(
        spreadsheetId="sid", range="'Completed Tasks'!A2:G"
    )


def test_update_rows_is_one_batch():
    svc, tab = make()
    tab.update_rows({2: ["a"] * 7, 5: ["b"] * 7})
    svc.spreadsheets().values().batchUpdate.assert_called_once_with(
        spreadsheetId="sid",
        body={
            "valueInputOption": "RAW",
            "data": [
                {"range": "'Completed Tasks'!A2:G2", "values": [["a"] * 7]},
                {"range": "'Completed Tasks'!A5:G5", "values": [["b"] * 7]},
            ],
        },
    )


def test_append_rows_inserts():
    svc, tab = make()
    tab.append_rows([["T9"]])
    svc.spreadsheets().values().append.assert_called_once_with(
        spreadsheetId="sid",
        range="'Completed Tasks'!A:G",
        valueInputOption="RAW",
        insertDataOption="INSERT_ROWS",
        body={"values": [["T9"]]},
    )


def test_empty_writes_are_skipped():
    svc, tab = make()
    tab.update_rows({})
    tab.append_rows([])
    svc.spreadsheets().values().batchUpdate.assert_not_called()
    svc.spreadsheets().values().append.assert_not_called()


def test_ensure_exists_adds_missing_tab():
    svc, tab = make(titles=("Sheet1",))
    assert tab.ensure_exists() is True
    svc.spreadsheets().batchUpdate.assert_called_once_with(
        spreadsheetId="sid",
        body={"requests": [{"addSheet": {"properties": {"title": "Completed Tasks"}}}]},
    )


def test_ensure_exists_noop_when_present():
    svc, tab = make()
    assert tab.ensure_exists() is False
    svc.spreadsheets().batchUpdate.assert_not_called()
