import pytest

from fixtures import (
    BACKTRACE_BLOCK,
    BACKTRACE_FRAMES,
    QUERY_STACK_BLOCK,
    QUERY_STACK_FRAMES,
    VERSION_BLOCK,
)

from dto.Fingerprint import RustcVersion
from extractors.block_extractors import BacktraceExtractor, QueryStackExtractor, VersionExtractor


class TestBacktraceExtractor:
    def test__extract__frames_are_trimmed_and_ordered(self):
        assert BacktraceExtractor().extract(BACKTRACE_BLOCK) == BACKTRACE_FRAMES

    def test__extract__stops_at_first_unindented_line(self):
        frames = BacktraceExtractor().extract(BACKTRACE_BLOCK)
        assert not any(frame.startswith("note:") for frame in frames)

    def test__extract__frames_without_addresses_are_accepted(self):
        body = "stack backtrace:\n   0: rust_begin_unwind\n   1: core::panicking::panic_fmt\n\nafter"
        assert BacktraceExtractor().extract(body) == ("0: rust_begin_unwind", "1: core::panicking::panic_fmt")

    def test__extract__crlf_block_matches_lf_block(self):
        crlf_body = BACKTRACE_BLOCK.replace("\n", "\r\n")
        assert BacktraceExtractor().extract(crlf_body) == BACKTRACE_FRAMES

    def test__extract__header_without_frames_returns_none(self):
        assert BacktraceExtractor().extract("stack backtrace:\nnote: nothing here") is None


class TestQueryStackExtractor:
    def test__extract__duplicate_frames_are_kept_in_order(self):
        assert QueryStackExtractor().extract(QUERY_STACK_BLOCK) == QUERY_STACK_FRAMES

    def test__extract__lines_are_not_trimmed(self):
        body = "query stack during panic:\n  #0 [typeck] indented  \nend of query stack\n"
        assert QueryStackExtractor().extract(body) == ("  #0 [typeck] indented  ",)

    def test__extract__crlf_lines_do_not_keep_carriage_return(self):
        crlf_body = QUERY_STACK_BLOCK.replace("\n", "\r\n")
        assert QueryStackExtractor().extract(crlf_body) == QUERY_STACK_FRAMES

    def test__extract__stops_at_first_footer(self):
        body = (
            "query stack during panic:\n#0 [a] first\nend of query stack\n"
            "unrelated commentary\n"
            "query stack during panic:\n#0 [b] second\nend of query stack\n"
        )
        assert QueryStackExtractor().extract(body) == ("#0 [a] first",)

    def test__extract__missing_footer_returns_none(self):
        body = "query stack during panic:\n#0 [typeck] type-checking `main`\n"
        assert QueryStackExtractor().extract(body) is None

    def test__extract__empty_block_returns_none(self):
        body = "query stack during panic:\nend of query stack\n"
        assert QueryStackExtractor().extract(body) is None

    def test__extract__footer_with_trailing_text_is_a_frame(self):
        body = (
            "query stack during panic:\n"
            "#0 [typeck] a\n"
            "end of query stack trace follows\n"
            "end of query stack\n"
        )
        assert QueryStackExtractor().extract(body) == ("#0 [typeck] a", "end of query stack trace follows")

    def test__extract__footer_with_trailing_text_only_returns_none(self):
        body = "query stack during panic:\n#0 [typeck] a\nend of query stackXYZ\n"
        assert QueryStackExtractor().extract(body) is None

    def test__extract__footer_with_trailing_whitespace_closes_block(self):
        body = "query stack during panic:\r\n#0 [typeck] a\r\nend of query stack  \r\nafter\r\n"
        assert QueryStackExtractor().extract(body) == ("#0 [typeck] a",)


class TestVersionExtractor:
    def test__extract__all_fields_are_captured(self):
        assert VersionExtractor().extract(VERSION_BLOCK) == RustcVersion(
            commit_hash="2c8cc343237b8f7d5a3c3703e3a87f2eb2c54a74",
            commit_date="2023-03-06",
            host="aarch64-apple-darwin",
            release="1.68.0",
            llvm_version="15.0.6",
        )

    def test__extract__crlf_block_is_accepted(self):
        version = VersionExtractor().extract(VERSION_BLOCK.replace("\n", "\r\n"))
        assert version is not None
        assert version.llvm_version == "15.0.6"
        assert version.host == "aarch64-apple-darwin"

    @pytest.mark.parametrize(
        "missing_line",
        ["binary: rustc", "commit-date: 2023-03-06", "LLVM version: 15.0.6"],
    )
    def test__extract__incomplete_block_returns_none(self, missing_line):
        body = VERSION_BLOCK.replace(missing_line + "\n", "").replace("\n" + missing_line, "")
        assert VersionExtractor().extract(body) is None

    def test__extract__non_contiguous_block_returns_none(self):
        body = VERSION_BLOCK.replace("host: aarch64-apple-darwin", "\nhost: aarch64-apple-darwin")
        assert VersionExtractor().extract(body) is None
