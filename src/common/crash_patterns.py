"""
Regular expressions for the markers rustc prints when it crashes.

Each pattern is anchored to a literal marker that the compiler emits
unconditionally, so noise elsewhere in an issue body (environment dumps,
reproduction steps, commentary) cannot produce a match. All patterns are
case-sensitive, accept an optional carriage return before each newline, and
never capture a line break.
"""

import re

# error: internal compiler error: compiler/rustc_infer/src/infer/mod.rs:568:17: <message>
ICE_MESSAGE_RX = re.compile(
    r"^error: internal compiler error: [^\r\n]+?:\d+:\d+: (?P<message>[^\r\n]+)",
    re.M,
)

# thread 'rustc' panicked at '<message>', compiler/rustc_middle/src/ty/mod.rs:10:5
# The message ends at the first quote that is not escaped with a backslash.
PANIC_MESSAGE_RX = re.compile(
    r"^thread 'rustc' panicked at '(?P<message>(?:[^'\\\r\n]|\\.)*)', (?P<location>[^\r\n]+)",
    re.M,
)

# stack backtrace:
#    0:     0x7f1c2d5f4a10 - std::backtrace_rs::backtrace::libunwind::trace
#                                at /rustc/.../library/std/src/../../backtrace/src/backtrace/libunwind.rs:93:5
BACKTRACE_RX = re.compile(
    r"^stack backtrace:[ \t]*\r?\n"
    r"(?P<frames>(?:[ \t]+(?:\d+:|at[ \t])[^\r\n]*(?:\r?\n|\Z))+)",
    re.M,
)

# note: compiler flags: -C embed-bitcode=no -C debuginfo=2
FLAGS_RX = re.compile(r"^note: compiler flags: (?P<flags>[^\r\n]+)", re.M)

# query stack during panic:
# #0 [typeck] type-checking `main`
# end of query stack
# The footer must be a whole line. Frame lines may not themselves be a footer,
# so a match stops at the first footer and never reaches a later block.
QUERY_STACK_RX = re.compile(
    r"^query stack during panic:[ \t]*\r?\n"
    r"(?P<stack>(?:(?!end of query stack[ \t]*\r?$)[^\r\n]*\r?\n)+)"
    r"end of query stack[ \t]*\r?$",
    re.M,
)

# rustc 1.68.0 (2c8cc3432 2023-03-06)
# binary: rustc
# commit-hash: 2c8cc343237b8f7d5a3c3703e3a87f2eb2c54a74
# commit-date: 2023-03-06
# host: aarch64-apple-darwin
# release: 1.68.0
# LLVM version: 15.0.6
VERSION_RX = re.compile(
    r"^binary: [^\r\n]+\r?\n"
    r"commit-hash: (?P<commit_hash>[^\r\n]+)\r?\n"
    r"commit-date: (?P<commit_date>[^\r\n]+)\r?\n"
    r"host: (?P<host>[^\r\n]+)\r?\n"
    r"release: (?P<release>[^\r\n]+)\r?\n"
    r"LLVM version: (?P<llvm_version>[^\r\n]+)",
    re.M,
)

LINE_BREAK_RX = re.compile(r"\r?\n")
