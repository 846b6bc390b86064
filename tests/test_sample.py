import unittest
from pathlib import Path
from unittest.mock import Mock, patch

import requests

import config
from services.sample import SampleFetchError, load_sample_table, sample_file_name


class LocalSampleTests(unittest.TestCase):
    def test_loads_bundled_csv(self) -> None:
        name, table = load_sample_table(url="", path=config.SAMPLE_DATA_PATH)

        self.assertEqual(name, config.BUNDLED_SAMPLE_NAME)
        self.assertIn("科目", table.columns)
        self.assertGreater(len(table), 10)

    def test_missing_file_raises(self) -> None:
        with self.assertRaises(SampleFetchError):
            load_sample_table(url="", path=Path("/nonexistent/sample.csv"))


class RemoteSampleTests(unittest.TestCase):
    URL = "https://example.com/dashboard/sample.csv"

    def test_fetches_configured_url(self) -> None:
        response = Mock(ok=True, status_code=200, content="科目,2023\n流動資産,10\n".encode("utf-8"))
        with patch("services.sample.requests.get", return_value=response) as mock_get:
            name, table = load_sample_table(url=self.URL, timeout=3)

        mock_get.assert_called_once_with(self.URL, timeout=3)
        self.assertEqual(name, "sample.csv")
        self.assertEqual(list(table.columns), ["科目", "2023"])

    def test_http_error_captures_status_and_body(self) -> None:
        response = Mock(ok=False, status_code=404, text="Not Found")
        with patch("services.sample.requests.get", return_value=response):
            with self.assertRaises(SampleFetchError) as ctx:
                load_sample_table(url=self.URL)

        message = str(ctx.exception)
        self.assertIn("HTTP 404", message)
        self.assertIn("Not Found", message)

    def test_transport_error_is_wrapped(self) -> None:
        with patch("services.sample.requests.get", side_effect=requests.ConnectionError("refused")):
            with self.assertRaises(SampleFetchError):
                load_sample_table(url=self.URL)

    def test_file_name_from_url(self) -> None:
        self.assertEqual(sample_file_name(url=self.URL), "sample.csv")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
