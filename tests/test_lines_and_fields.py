"""Tests for ingredient, step and metadata line parsing."""

import pytest

from kitchenbook.recipe_import.fields import (
    match_field,
    parse_difficulty,
    parse_minutes,
    parse_servings,
    parse_tags,
)
from kitchenbook.recipe_import.lines import parse_ingredient_line, parse_step_line
from kitchenbook.recipe_import.models import ParsedIngredient, ParsedStep


class TestIngredientLine:
    """Tests for ingredient bullet parsing."""

    def test_amount_and_unit(self):
        assert parse_ingredient_line("鸡蛋 3个") == ParsedIngredient(name="鸡蛋", amount="3", unit="个")

    def test_decimal_amount(self):
        assert parse_ingredient_line("酱油 1.5勺") == ParsedIngredient(name="酱油", amount="1.5", unit="勺")

    def test_amount_separated_from_unit(self):
        assert parse_ingredient_line("面粉 200 g") == ParsedIngredient(name="面粉", amount="200", unit="g")

    def test_parenthetical_removed(self):
        assert parse_ingredient_line("面粉 200g (约2杯)") == ParsedIngredient(name="面粉", amount="200", unit="g")
        assert parse_ingredient_line("鸡蛋（大） 2个") == ParsedIngredient(name="鸡蛋", amount="2", unit="个")

    def test_bare_number_gets_default_unit(self):
        assert parse_ingredient_line("鸡蛋 3").unit == "个"
        assert parse_ingredient_line("eggs 3", default_unit="pcs").unit == "pcs"

    def test_non_numeric_amount_has_no_unit(self):
        assert parse_ingredient_line("盐 适量") == ParsedIngredient(name="盐", amount="适量", unit="")

    def test_optional_marker(self):
        ing = parse_ingredient_line("香菜 适量[可选]")
        assert ing == ParsedIngredient(name="香菜", amount="适量", unit="", optional=True)

    def test_optional_marker_english_any_case(self):
        assert parse_ingredient_line("cilantro 1 bunch [Optional]").optional is True

    def test_optional_marker_glued_to_name(self):
        ing = parse_ingredient_line("香菜[可选] 1根")
        assert ing.name == "香菜"
        assert ing.optional is True

    @pytest.mark.parametrize("text", ["盐", "", "   ", "[可选]", "(备用)"])
    def test_needs_name_and_amount(self, text):
        assert parse_ingredient_line(text) is None


class TestStepLine:
    """Tests for numbered step parsing."""

    def test_plain_step(self):
        assert parse_step_line("1. 打散鸡蛋。") == ParsedStep(description="打散鸡蛋。")

    def test_duration_and_timer(self):
        assert parse_step_line("2. 煮面(10 分钟)[计时]") == ParsedStep(
            description="煮面", duration=10, is_timer_enabled=True
        )

    def test_timer_without_duration(self):
        assert parse_step_line("3. Rest the dough [timer]") == ParsedStep(
            description="Rest the dough", is_timer_enabled=True
        )

    def test_duration_without_timer(self):
        step = parse_step_line("4. 焖(15分钟)")
        assert step.duration == 15
        assert step.is_timer_enabled is False
        assert step.description == "焖"

    @pytest.mark.parametrize("text", ["Simmer (20 min)", "焖（15分钟）", "炖 ( 20 分钟 )"])
    def test_other_duration_forms_stay_in_description(self, text):
        step = parse_step_line(f"1. {text}")
        assert step.duration is None
        assert step.description == text

    def test_inner_whitespace_kept(self):
        assert parse_step_line("1. 切  丝").description == "切  丝"
        assert parse_step_line("2.   切  丝 (3 分钟)  [计时]  ").description == "切  丝"

    def test_overlong_duration_left_in_text(self):
        digits = "9" * 5000
        step = parse_step_line(f"1. 煮面 ({digits} 分钟)")
        assert step.duration is None
        assert step.description == f"煮面 ({digits} 分钟)"

    def test_duration_in_middle_of_text(self):
        step = parse_step_line("5. 小火炖 (30 分钟) 至软烂")
        assert step.description == "小火炖 至软烂"
        assert step.duration == 30

    def test_multi_digit_step_number(self):
        assert parse_step_line("12. 装盘").description == "装盘"

    def test_empty_after_markers(self):
        assert parse_step_line("6. [计时]") is None
        assert parse_step_line("7.") is None


class TestFieldLine:
    """Tests for bold metadata labels."""

    def test_chinese_label(self):
        assert match_field("**分类**: 家常菜") == ("category", "家常菜")

    def test_english_label_any_case(self):
        assert match_field("**Prep Time**: 15 min") == ("prep_time", "15 min")

    def test_fullwidth_colon(self):
        assert match_field("**份数**：2") == ("servings", "2")

    def test_empty_value(self):
        assert match_field("**小贴士**:") == ("notes", "")

    def test_unknown_label(self):
        assert match_field("**作者**: 小王") is None

    def test_not_a_field(self):
        assert match_field("**bold text**") is None
        assert match_field("分类: 家常菜") is None


class TestFieldValues:
    def test_difficulty(self):
        assert parse_difficulty("3") == 3
        assert parse_difficulty("2 (easy)") == 2
        assert parse_difficulty("hard") == 1
        assert parse_difficulty("0") == 1
        assert parse_difficulty("") == 1
        assert parse_difficulty("9" * 5000) == 1
        assert parse_difficulty("999999999") == 999999999

    def test_minutes(self):
        assert parse_minutes("15 分钟") == 15
        assert parse_minutes("about 20 min") == 20
        assert parse_minutes("n/a") is None
        assert parse_minutes("9" * 5000) is None

    def test_servings(self):
        assert parse_servings("4") == 4
        assert parse_servings("2-3人") == 2
        assert parse_servings("两人") == 1
        assert parse_servings("9" * 5000) == 1

    def test_tags(self):
        assert parse_tags("#快手 #下饭 素食") == ["快手", "下饭"]
        assert parse_tags("") == []
