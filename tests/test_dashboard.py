from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pandas as pd
import streamlit as st

from state import (
    ERROR_KEY,
    FILE_NAME_KEY,
    INTAKE_ERROR_KEY,
    SAMPLE_LOADED_KEY,
    TABLE_KEY,
    UPLOAD_SIGNATURE_KEY,
    ensure_session_defaults,
    store_table,
)
from validators import UNSUPPORTED_FILE_MESSAGE
from views import dashboard

CSV_BYTES = "科目,2023\n流動資産,100\n".encode("utf-8")


def _upload(name: str, mime: str, data: bytes = CSV_BYTES, file_id: str = "upload-1"):
    return SimpleNamespace(
        name=name,
        type=mime,
        size=len(data),
        file_id=file_id,
        getvalue=lambda: data,
    )


class DashboardTestCase(unittest.TestCase):
    def setUp(self) -> None:
        st.session_state.clear()
        ensure_session_defaults()
        fake_st = MagicMock()
        fake_st.session_state = st.session_state
        patcher = patch.object(dashboard, "st", fake_st)
        self.fake_st = patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        st.session_state.clear()


class HandleUploadTests(DashboardTestCase):
    def test_unsupported_file_never_reaches_the_parser(self) -> None:
        previous = pd.DataFrame({"科目": ["流動資産"], "2023": [1]})
        store_table(previous)
        st.session_state[FILE_NAME_KEY] = "sample_balance_sheet.csv"

        with patch.object(dashboard, "_parse_cached") as parser:
            dashboard._handle_upload(_upload("notes.txt", "text/plain"))

        parser.assert_not_called()
        self.assertEqual(st.session_state[INTAKE_ERROR_KEY], UNSUPPORTED_FILE_MESSAGE)
        self.assertIs(st.session_state[TABLE_KEY], previous)
        self.assertEqual(st.session_state[FILE_NAME_KEY], "sample_balance_sheet.csv")

    def test_same_upload_is_parsed_once(self) -> None:
        table = pd.DataFrame({"科目": ["流動資産"], "2023": [100]})
        upload = _upload("bs.csv", "text/csv")

        with patch.object(dashboard, "_parse_cached", return_value=table) as parser:
            dashboard._handle_upload(upload)
            dashboard._handle_upload(upload)

        parser.assert_called_once_with(CSV_BYTES, "csv")
        self.assertIs(st.session_state[TABLE_KEY], table)
        self.assertEqual(st.session_state[FILE_NAME_KEY], "bs.csv")
        self.assertEqual(st.session_state[UPLOAD_SIGNATURE_KEY], "upload-1")
        self.assertTrue(st.session_state[SAMPLE_LOADED_KEY])

    def test_parse_error_is_stored_for_display(self) -> None:
        with patch.object(
            dashboard,
            "_parse_cached",
            side_effect=dashboard.ParseError("CSVパースエラー: broken"),
        ):
            dashboard._handle_upload(_upload("bs.csv", "text/csv"))

        self.assertIsNone(st.session_state[TABLE_KEY])
        self.assertEqual(st.session_state[ERROR_KEY], "CSVパースエラー: broken")


class RenderDashboardPageTests(DashboardTestCase):
    def test_clearing_the_uploader_drops_the_intake_message(self) -> None:
        st.session_state[SAMPLE_LOADED_KEY] = True
        with patch.object(dashboard, "_parse_cached") as parser:
            dashboard._handle_upload(_upload("notes.txt", "text/plain"))
        parser.assert_not_called()
        self.assertEqual(st.session_state[INTAKE_ERROR_KEY], UNSUPPORTED_FILE_MESSAGE)

        self.fake_st.file_uploader.return_value = None
        dashboard.render_dashboard_page()

        self.assertEqual(st.session_state[INTAKE_ERROR_KEY], "")
        self.assertEqual(st.session_state[UPLOAD_SIGNATURE_KEY], "")
        self.fake_st.error.assert_not_called()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
