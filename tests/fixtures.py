"""
Shared test fixtures: sample rustc crash reports as they appear in issue bodies.
"""

ICE_LINE = (
    "error: internal compiler error: compiler/rustc_infer/src/infer/region_constraints/mod.rs:568:17: "
    "cannot relate bound region: ReLateBound(DebruijnIndex(0), BoundRegion { var: 1, kind: "
    "BrNamed(DefId(0:8 ~ prefix[b2cc]::longest_common_prefix::'_#1), '_) }) <= '_#29r"
)

ICE_MESSAGE = (
    "cannot relate bound region: ReLateBound(DebruijnIndex(0), BoundRegion { var: 1, kind: "
    "BrNamed(DefId(0:8 ~ prefix[b2cc]::longest_common_prefix::'_#1), '_) }) <= '_#29r"
)

VERSION_BLOCK = """rustc 1.68.0 (2c8cc3432 2023-03-06) (built from a source tarball)
binary: rustc
commit-hash: 2c8cc343237b8f7d5a3c3703e3a87f2eb2c54a74
commit-date: 2023-03-06
host: aarch64-apple-darwin
release: 1.68.0
LLVM version: 15.0.6"""

FLAGS_LINE = (
    "note: compiler flags: -C embed-bitcode=no -C split-debuginfo=unpacked "
    "-C debuginfo=2 -C incremental=[REDACTED]"
)

QUERY_STACK_BLOCK = """query stack during panic:
#0 [typeck] type-checking `longest_common_prefix`
#1 [typeck_item_bodies] type-checking all item bodies
#2 [analysis] running analysis passes on this crate
#0 [typeck] type-checking `longest_common_prefix`
#1 [typeck_item_bodies] type-checking all item bodies
#2 [analysis] running analysis passes on this crate
end of query stack"""

QUERY_STACK_FRAMES = (
    "#0 [typeck] type-checking `longest_common_prefix`",
    "#1 [typeck_item_bodies] type-checking all item bodies",
    "#2 [analysis] running analysis passes on this crate",
    "#0 [typeck] type-checking `longest_common_prefix`",
    "#1 [typeck_item_bodies] type-checking all item bodies",
    "#2 [analysis] running analysis passes on this crate",
)

BACKTRACE_BLOCK = """stack backtrace:
   0:        0x1030a5ee8 - std::backtrace_rs::backtrace::libunwind::trace::h1c1d9d2f8f5b3f3a
                               at /rustc/2c8cc343237b8f7d5a3c3703e3a87f2eb2c54a74/library/std/src/../../backtrace/src/backtrace/libunwind.rs:93:5
   1:        0x1030a6f10 - std::backtrace_rs::backtrace::trace_unsynchronized::h8f0bf0b7e4e7a9a2
note: Some details are omitted, run with `RUST_BACKTRACE=full` for a verbose backtrace."""

BACKTRACE_FRAMES = (
    "0:        0x1030a5ee8 - std::backtrace_rs::backtrace::libunwind::trace::h1c1d9d2f8f5b3f3a",
    "at /rustc/2c8cc343237b8f7d5a3c3703e3a87f2eb2c54a74/library/std/src/../../backtrace/src/backtrace/libunwind.rs:93:5",
    "1:        0x1030a6f10 - std::backtrace_rs::backtrace::trace_unsynchronized::h8f0bf0b7e4e7a9a2",
)

PANIC_LINE = (
    "thread 'rustc' panicked at 'Box<dyn Any>', "
    "/rustc/2c8cc343237b8f7d5a3c3703e3a87f2eb2c54a74/compiler/rustc_errors/src/lib.rs:1644:9"
)

SAMPLE_ICE_REPORT = f"""<!--
Thank you for finding an Internal Compiler Error! 🧊
-->

### Code

```rust
fn longest_common_prefix<'a>(a: &'a str, b: &str) -> &'a str {{ todo!() }}
```

### Meta

`rustc --version --verbose`:
```
{VERSION_BLOCK}
```

### Error output

```
{ICE_LINE}

{PANIC_LINE}
{BACKTRACE_BLOCK}

note: the compiler unexpectedly panicked. this is a bug.

note: we would appreciate a bug report: https://github.com/rust-lang/rust/issues/new?labels=C-bug%2C+I-ICE%2C+T-compiler&template=ice.md

note: rustc 1.68.0 (2c8cc3432 2023-03-06) running on aarch64-apple-darwin

{FLAGS_LINE}

note: some of the compiler flags provided by cargo are hidden

{QUERY_STACK_BLOCK}
```
"""

NO_CRASH_REPORT = """### Description

The compiler is slow on this crate and uses a lot of memory.
I expected the build to finish in under a minute.
"""

# Two crash reports with the same message and query stack but different
# surrounding commentary.
SHARED_QUERY_STACK = """query stack during panic:
#0 [mir_borrowck] borrow-checking `main`
#1 [analysis] running analysis passes on this crate
end of query stack"""

SHARED_ICE_LINE = "error: internal compiler error: compiler/rustc_borrowck/src/lib.rs:42:9: no region for local"


def make_issue_payload(number, body, state="open", labels=("I-ICE",), **extra):
    """GitHub issue JSON object as returned by the REST API."""
    payload = {
        "id": 1000000 + number,
        "number": number,
        "state": state,
        "title": f"ICE in issue {number}",
        "body": body,
        "labels": [
            {"id": 100 + index, "name": name, "description": None}
            for index, name in enumerate(labels)
        ],
        "html_url": f"https://github.com/rust-lang/rust/issues/{number}",
        "comments": 0,
    }
    payload.update(extra)
    return payload
