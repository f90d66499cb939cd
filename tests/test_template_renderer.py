"""
Tests for message content rendering
"""
import pytest

from utils.template_renderer import render_content, collect_locales, TemplateError


def test_renders_date_into_single_locale():
    rendered = render_content({'en_US': 'Today is {{date}}'}, '2024-01-01 10:00:00')

    assert rendered == '{"en_US": "Today is 2024-01-01 10:00:00"}'


def test_renders_every_locale_and_keeps_other_characters():
    content = {
        'en_US': 'Sent "QA" at {{date}}!',
        'zh_HK': '測試 {{ date }}',
    }

    rendered = render_content(content, '2024-01-01 10:00:00')

    assert rendered == (
        '{"en_US": "Sent \\"QA\\" at 2024-01-01 10:00:00!", '
        '"zh_HK": "測試 2024-01-01 10:00:00"}'
    )


def test_content_without_placeholder_is_unchanged():
    assert render_content({'en_US': 'Hello'}, '2024-01-01 10:00:00') == '{"en_US": "Hello"}'


def test_empty_content_renders_empty_object():
    assert render_content(None, '2024-01-01 10:00:00') == '{}'
    assert render_content({}, '2024-01-01 10:00:00') == '{}'


def test_unclosed_placeholder_raises_template_error():
    with pytest.raises(TemplateError):
        render_content({'en_US': 'Broken {{ date'}, '2024-01-01 10:00:00')


def test_block_markers_in_text_are_kept():
    rendered = render_content({'en_US': '50{%} off {{date}}'}, '2024-01-01 10:00:00')

    assert rendered == '{"en_US": "50{%} off 2024-01-01 10:00:00"}'


def test_comment_markers_in_text_are_kept():
    rendered = render_content({'en_US': 'Deal {#1 at {{date}} #}'}, '2024-01-01 10:00:00')

    assert rendered == '{"en_US": "Deal {#1 at 2024-01-01 10:00:00 #}"}'


def test_unserializable_content_raises_template_error():
    with pytest.raises(TemplateError):
        render_content({'en_US': object()}, '2024-01-01 10:00:00')


def test_locales_are_comma_joined():
    assert collect_locales({'en_US': 'a', 'zh_HK': 'b', 'ja_JP': 'c'}) == 'en_US,zh_HK,ja_JP'


def test_locales_default_to_en_us():
    assert collect_locales({}) == 'en_US'
    assert collect_locales(None) == 'en_US'
