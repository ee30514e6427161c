"""Tests for acm_switch/profiles/records.py - profile record codec."""

from pathlib import Path

import pytest

from acm_switch.enums import CredentialKind
from acm_switch.exceptions import InvalidProfileError, MalformedRecordError
from acm_switch.profiles.models import Profile
from acm_switch.profiles.records import (
    format_record,
    parse_record,
    parse_records,
    validate_profile,
)


class TestParseRecord:
    def test_full_record(self):
        profile = parse_record("mirror|Mirror|sk-1|https://gaccode.com/claudecode|KEY")

        assert profile == Profile(
            alias="mirror",
            display_name="Mirror",
            secret="sk-1",
            base_url="https://gaccode.com/claudecode",
            kind=CredentialKind.KEY,
        )

    def test_legacy_four_field_record_defaults_to_token(self):
        profile = parse_record("old|Old|sk-old|https://api.example.com")

        assert profile.kind == CredentialKind.TOKEN
        assert profile.base_url == "https://api.example.com"

    def test_empty_kind_field_defaults_to_token(self):
        assert parse_record("a|A|sk|https://x|").kind == CredentialKind.TOKEN

    def test_lowercase_kind_is_accepted(self):
        assert parse_record("a|A|sk|https://x|key").kind == CredentialKind.KEY

    def test_line_ending_is_ignored(self):
        profile = parse_record("a|A|sk|https://x|KEY\r\n")

        assert profile.kind == CredentialKind.KEY
        assert profile.base_url == "https://x"

    def test_empty_display_name_and_secret_are_kept(self):
        profile = parse_record("a|||https://x|TOKEN")

        assert profile.display_name == ""
        assert profile.secret == ""

    @pytest.mark.parametrize(
        "line",
        [
            "a|A|sk",
            "a",
            "a|A|sk|https://x|KEY|extra",
        ],
    )
    def test_wrong_field_count_is_rejected(self, line):
        with pytest.raises(MalformedRecordError) as exc_info:
            parse_record(line)

        assert "fields" in exc_info.value.message

    def test_empty_alias_is_rejected(self):
        with pytest.raises(MalformedRecordError):
            parse_record("|A|sk|https://x|KEY")

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            parse_record("a|A|sk|https://x|BEARER")

        assert "BEARER" in exc_info.value.message

    def test_error_names_file_and_line(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            parse_record("broken", path=Path("/tmp/profiles"), line_number=7)

        assert exc_info.value.path == Path("/tmp/profiles")
        assert exc_info.value.line_number == 7
        assert "/tmp/profiles:7" in exc_info.value.message


class TestParseRecords:
    def test_blank_lines_are_skipped_and_order_kept(self):
        content = "\nb|B|sk-b|https://b\n\n   \na|A|sk-a|https://a|KEY\n"

        profiles = parse_records(content)

        assert [p.alias for p in profiles] == ["b", "a"]

    def test_empty_content(self):
        assert parse_records("") == []

    def test_line_number_counts_blank_lines(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            parse_records("a|A|sk|https://a\n\nbroken-line\n")

        assert exc_info.value.line_number == 3


class TestFormatRecord:
    def test_format_writes_all_five_fields(self, key_profile):
        assert format_record(key_profile) == (
            "mirror|Mirror|sk-mirror-fedcba9876543210|https://api.aicodemirror.com/api/claudecode|KEY"
        )

    def test_formatted_record_parses_back(self, token_profile):
        assert parse_record(format_record(token_profile)) == token_profile


class TestValidateProfile:
    def test_valid_profile_passes(self, token_profile):
        validate_profile(token_profile)

    @pytest.mark.parametrize(
        "fields",
        [
            {"alias": ""},
            {"alias": "   "},
            {"alias": "a|b"},
            {"display_name": "Pipe|Name"},
            {"secret": "sk|1"},
            {"base_url": "https://x|y"},
            {"secret": "sk\n1"},
            {"display_name": "two\r\nlines"},
        ],
    )
    def test_unstorable_fields_are_rejected(self, fields):
        values = {"alias": "a", "display_name": "A", "secret": "sk", "base_url": "https://x"}
        values.update(fields)

        with pytest.raises(InvalidProfileError):
            validate_profile(Profile(**values))
