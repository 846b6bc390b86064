from __future__ import annotations

import unittest

import pandas as pd
import streamlit as st

from state import (
    ERROR_KEY,
    FILE_NAME_KEY,
    INTAKE_ERROR_KEY,
    SAMPLE_LOADED_KEY,
    TABLE_KEY,
    UPLOAD_SIGNATURE_KEY,
    clear_upload_selection,
    ensure_session_defaults,
    start_new_upload,
    store_error,
    store_table,
)


class SessionStateTests(unittest.TestCase):
    def setUp(self) -> None:
        st.session_state.clear()

    def tearDown(self) -> None:
        st.session_state.clear()

    def test_defaults_replace_invalid_values(self) -> None:
        st.session_state[TABLE_KEY] = "not a table"
        st.session_state[SAMPLE_LOADED_KEY] = True

        ensure_session_defaults()

        self.assertIsNone(st.session_state[TABLE_KEY])
        self.assertTrue(st.session_state[SAMPLE_LOADED_KEY])
        self.assertEqual(st.session_state[ERROR_KEY], "")

    def test_new_upload_discards_previous_result(self) -> None:
        ensure_session_defaults()
        store_table(pd.DataFrame({"科目": ["流動資産"], "2023": [1]}))
        st.session_state[INTAKE_ERROR_KEY] = "CSVまたはExcelファイルを選択してください。"

        start_new_upload("next.csv", "sig-2")

        self.assertIsNone(st.session_state[TABLE_KEY])
        self.assertEqual(st.session_state[INTAKE_ERROR_KEY], "")
        self.assertEqual(st.session_state[FILE_NAME_KEY], "next.csv")
        self.assertEqual(st.session_state[UPLOAD_SIGNATURE_KEY], "sig-2")

    def test_clearing_selection_keeps_the_shown_table(self) -> None:
        ensure_session_defaults()
        table = pd.DataFrame({"a": [1]})
        store_table(table)
        st.session_state[INTAKE_ERROR_KEY] = "CSVまたはExcelファイルを選択してください。"
        st.session_state[UPLOAD_SIGNATURE_KEY] = "sig-1"

        clear_upload_selection()

        self.assertEqual(st.session_state[INTAKE_ERROR_KEY], "")
        self.assertEqual(st.session_state[UPLOAD_SIGNATURE_KEY], "")
        self.assertIs(st.session_state[TABLE_KEY], table)

    def test_store_error_clears_table(self) -> None:
        ensure_session_defaults()
        store_table(pd.DataFrame({"a": [1]}))

        store_error("CSVパースエラー: broken")

        self.assertIsNone(st.session_state[TABLE_KEY])
        self.assertEqual(st.session_state[ERROR_KEY], "CSVパースエラー: broken")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
