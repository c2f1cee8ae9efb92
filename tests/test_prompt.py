"""Unit tests for interactive answers (rapid_scaffold.prompt)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from rapid_scaffold.config import ExistingDestPolicy, ScaffoldConfig
from rapid_scaffold.prompt import ask_project_name, ask_variant, collect_answers


class TestAskProjectName:
    @pytest.mark.unit
    def test_accepts_first_valid_answer(self, tmp_path: Path):
        with patch("rapid_scaffold.prompt.Prompt.ask", return_value="my-app") as mock_ask:
            assert ask_project_name(ScaffoldConfig(), tmp_path) == "my-app"

        assert mock_ask.call_args.kwargs["default"] == "rapid-framework-fe"

    @pytest.mark.unit
    def test_default_name_from_config(self, tmp_path: Path):
        config = ScaffoldConfig(default_project_name="shop-fe")
        with patch("rapid_scaffold.prompt.Prompt.ask", return_value="shop-fe") as mock_ask:
            ask_project_name(config, tmp_path)
        assert mock_ask.call_args.kwargs["default"] == "shop-fe"

    @pytest.mark.unit
    def test_reprompts_on_invalid_name(self, tmp_path: Path):
        with patch("rapid_scaffold.prompt.Prompt.ask", side_effect=[".", "  ", "app"]) as mock_ask:
            assert ask_project_name(ScaffoldConfig(), tmp_path) == "app"
        assert mock_ask.call_count == 3

    @pytest.mark.unit
    def test_fail_policy_reprompts_on_existing_folder(self, tmp_path: Path):
        (tmp_path / "taken").mkdir()
        (tmp_path / "taken" / "file.txt").write_text("x")
        config = ScaffoldConfig(policy=ExistingDestPolicy.FAIL)

        with patch("rapid_scaffold.prompt.Prompt.ask", side_effect=["taken", "fresh"]) as mock_ask:
            assert ask_project_name(config, tmp_path) == "fresh"
        assert mock_ask.call_count == 2

    @pytest.mark.unit
    def test_fail_policy_accepts_empty_folder(self, tmp_path: Path):
        (tmp_path / "empty").mkdir()
        config = ScaffoldConfig(policy=ExistingDestPolicy.FAIL)

        with patch("rapid_scaffold.prompt.Prompt.ask", return_value="empty"):
            assert ask_project_name(config, tmp_path) == "empty"

    @pytest.mark.unit
    def test_preserve_policy_accepts_existing_folder(self, tmp_path: Path):
        (tmp_path / "taken").mkdir()
        (tmp_path / "taken" / "file.txt").write_text("x")

        with patch("rapid_scaffold.prompt.Prompt.ask", return_value="taken") as mock_ask:
            assert ask_project_name(ScaffoldConfig(), tmp_path) == "taken"
        assert mock_ask.call_count == 1


class TestAskVariant:
    @pytest.mark.unit
    def test_offers_all_variants(self):
        with patch("rapid_scaffold.prompt.Prompt.ask", return_value="tailwind") as mock_ask:
            assert ask_variant() == "tailwind"

        kwargs = mock_ask.call_args.kwargs
        assert kwargs["choices"] == ["material-ui", "antd", "tailwind"]
        assert kwargs["default"] == "material-ui"


class TestCollectAnswers:
    @pytest.mark.unit
    def test_no_prompt_when_both_given(self, tmp_path: Path):
        with patch("rapid_scaffold.prompt.Prompt.ask") as mock_ask:
            answers = collect_answers(ScaffoldConfig(), tmp_path, "app", "antd")
        assert answers == ("app", "antd")
        mock_ask.assert_not_called()

    @pytest.mark.unit
    def test_prompts_for_missing_values(self, tmp_path: Path):
        with patch("rapid_scaffold.prompt.Prompt.ask", side_effect=["app", "antd"]):
            assert collect_answers(ScaffoldConfig(), tmp_path) == ("app", "antd")

    @pytest.mark.unit
    def test_prompts_only_for_variant(self, tmp_path: Path):
        with patch("rapid_scaffold.prompt.Prompt.ask", return_value="material-ui") as mock_ask:
            assert collect_answers(ScaffoldConfig(), tmp_path, project_name="app") == (
                "app",
                "material-ui",
            )
        assert mock_ask.call_count == 1
