import functools
import unittest
from unittest.mock import patch

import config
from ui.streamlit_compat import stretch_width_kwargs


def new_style(data=None, *, width="stretch", use_container_width=None):
    return data


def old_style(data=None, *, width=None, use_container_width=False):
    return data


def no_sizing(data=None):
    return data


class StretchWidthKwargsTests(unittest.TestCase):
    def test_prefers_width_keyword_when_supported(self) -> None:
        self.assertEqual(stretch_width_kwargs(new_style), {"width": "stretch"})

    def test_falls_back_to_use_container_width(self) -> None:
        self.assertEqual(stretch_width_kwargs(old_style), {"use_container_width": True})

    def test_unwraps_decorated_callables(self) -> None:
        @functools.wraps(old_style)
        def wrapper(*args, **kwargs):
            return old_style(*args, **kwargs)

        self.assertEqual(stretch_width_kwargs(wrapper), {"use_container_width": True})

    def test_returns_empty_for_unsupported_callables(self) -> None:
        self.assertEqual(stretch_width_kwargs(no_sizing), {})


class AssetUrlTests(unittest.TestCase):
    def test_follows_server_base_url_path(self) -> None:
        with patch("config.st.get_option", return_value="/reports/") as get_option:
            self.assertEqual(config.asset_url("/app/static/sample.csv"), "/reports/app/static/sample.csv")
        get_option.assert_called_with("server.baseUrlPath")

    def test_root_deployment_has_no_prefix(self) -> None:
        with patch("config.st.get_option", return_value=""):
            self.assertEqual(config.base_path(), "")
            self.assertEqual(config.asset_url("app/static/sample.csv"), "/app/static/sample.csv")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
