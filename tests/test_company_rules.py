import pytest

from heuristics.company_rules import (
    COMPANY_LINE_RULES,
    detect_company,
    find_repeated_capitalized_words,
    infer_company_from_leading_lines,
)
from utils.helpers import split_lines


def _company(text: str) -> str:
    return detect_company(text, split_lines(text))


def _rule(name):
    return next(r for r in COMPANY_LINE_RULES if r.name == name)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Company: Acme Corp", "Acme Corp"),
        ("employer:Initech", "Initech"),
        ("Thank you for applying to Stripe. We will be in touch.", "Stripe"),
        ("We appreciate your interest in the role at Datadog.", "Datadog"),
        ("Figma Hiring Team", "Figma"),
        ("Notion <no-reply@notion.so>", "Notion"),
        ("Your candidate reference number - Lockheed Martin", "Lockheed Martin"),
    ],
)
def test_line_rules(text, expected):
    assert _company(text) == expected


def test_rules_are_tried_in_order_on_each_line():
    text = "Thank you for applying to Stripe! Sent by Jane at Acme."
    assert _rule("at_company").apply(text) == "Acme"
    assert _company(text) == "Stripe"


def test_earlier_line_wins_over_stronger_rule_later():
    assert _company("Figma Hiring Team\nCompany: Other") == "Figma"


def test_empty_labeled_value_does_not_stop_the_scan():
    assert _company("Company:\nThank you for applying to Ramp!") == "Ramp"


def test_sender_rule_rejects_greetings():
    assert _rule("email_sender").apply("Hiring Team <jobs@acme.com>") is None
    assert _rule("email_sender").apply("Al <al@acme.com>") is None
    assert _company("Hiring Team <jobs@acme.com>") == ""


def test_repeated_words_are_ranked():
    text = "Acme Labs here. Acme Labs again. Acme once more. Beta Beta"
    assert find_repeated_capitalized_words(text) == ["Acme", "Acme Labs", "Labs", "Beta"]


def test_repeated_words_skip_stopwords_and_calendar_words():
    assert find_repeated_capitalized_words("Monday Monday Marketing Marketing Thank Thank") == []


def test_repeated_word_inference():
    text = "Welcome aboard!\nthe zephyr crew loves Zephyr\nregards from Zephyr"
    assert _company(text) == "Zephyr"


def test_leading_lines_prefer_single_word():
    assert infer_company_from_leading_lines(["Lockheed Martin", "we got your note"]) == "Lockheed"


def test_leading_lines_multi_word_phrase():
    assert infer_company_from_leading_lines(["Big Co", "we got your note"]) == "Big Co"


def test_leading_lines_skip_greetings_and_boilerplate():
    lines = ["Dear Applicant", "jobs@globex.com", "Thank you so much", "Globex"]
    assert infer_company_from_leading_lines(lines) == "Globex"


def test_no_company():
    assert _company("please fill this in later\nno details were visible here") == ""
