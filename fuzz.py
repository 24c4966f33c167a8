#!/usr/bin/env python3
"""
Random fuzzer for typepants.
Generates tag soup full of quotes, dashes and stray markup and checks that
conversion never crashes, never hangs and never touches markup or skipped text.
"""

import argparse
import random
import string
import sys
import time
import traceback

from typepants import Config, Converter, Tag, tokenize
from typepants.skip import SKIP_TAGS, SkipTagStack

# Fuzzing strategies
TAGS = [
    "div", "span", "p", "a", "img", "b", "i", "em", "strong", "br", "h1", "blockquote",
    "li", "ul", "table", "td", "preface", "codex", "sample", "mathml", "title",
]

ATTRIBUTES = ["id", "class", "title", "alt", "href", "data-x", "style"]

PUNCTUATION = [
    "'", '"', "''", "``", "`", "--", "---", "----", "...", ". . .", "..", "\\",
    "\\'", '\\"', "\\\\", "\\-", "\\.", "\\`", "&quot;", "&nbsp;", "&mdash;",
    "&#8212;", "&#x2013;", "&#8220;", "&#8217;", "'80s", "'n'", "<", ">",
]

SPECIAL_CHARS = [
    "\u00a0",  # Non-breaking space
    "\u2028", "\u2029",  # Line/paragraph separators
    "\u200b",  # Zero-width space
    "\ufeff",  # BOM
    "\u201c", "\u2019",  # Curly quotes already in the input
]

CONFIGS = [
    Config(),
    Config.nothing(),
    Config(entities="unicode"),
    Config(entities="named", convert_quot=True),
    Config(entities="ascii", single_backticks="curly"),
    Config.from_attr("1"),
    Config.from_attr("3"),
    Config.from_attr("-1"),
]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    ws = [" ", "\t", "\n", "\r", "\x0c", ""]
    return "".join(random.choices(ws, k=random.randint(0, 3)))


def fuzz_text():
    """Generate prose sprinkled with punctuation that gets educated."""
    parts = []
    for _ in range(random.randint(1, 12)):
        choice = random.random()
        if choice < 0.45:
            parts.append(random_string(0, 8))
        elif choice < 0.85:
            parts.append(random.choice(PUNCTUATION))
        elif choice < 0.95:
            parts.append(random_whitespace())
        else:
            parts.append(random.choice(SPECIAL_CHARS))
    return "".join(parts)


def fuzz_open_tag():
    """Generate opening tags, sometimes malformed."""
    tag = random.choice(TAGS + list(SKIP_TAGS))
    if random.random() < 0.3:
        tag = tag.upper()
    attrs = ""
    for _ in range(random.randint(0, 3)):
        value = random.choice([random_string(0, 6), fuzz_text()]).replace(">", "")
        quote = random.choice(['"', "'", ""])
        attrs += f" {random.choice(ATTRIBUTES)}={quote}{value}{quote}"
    variants = [
        f"<{tag}{attrs}>",
        f"<{tag}{attrs}/>",
        f"<{tag}{random_whitespace()}>",
        f"<{tag}",  # Unclosed
    ]
    return random.choice(variants)


def fuzz_close_tag():
    tag = random.choice(TAGS + list(SKIP_TAGS))
    variants = [
        f"</{tag}>",
        f"</{tag.upper()}>",
        f"</{tag} {random_string(1, 5)}>",
        f"</ {tag}>",
        "</>",
    ]
    return random.choice(variants)


def fuzz_comment():
    """Generate comments, with and without runs of dashes in the body."""
    content = fuzz_text().replace(">", "")
    variants = [
        f"<!--{content}-->",
        f"<!-- {content} -- {content} -->",
        f"<!--{content}--->",
        f"<!--{content}-- >",
        f"<!--{content}",  # Unclosed
        "<!---->",
        "<!-->",
        f"<!--{content}\n{content}-->",
        f"<!--{content}>" * random.randint(50, 500),  # Many unterminated
    ]
    return random.choice(variants)


def fuzz_skip_region():
    """Generate a skip tag with punctuation inside, possibly nested or unbalanced."""
    outer = random.choice(SKIP_TAGS)
    inner = random.choice(SKIP_TAGS)
    body = fuzz_text().replace("<", "")
    variants = [
        f"<{outer}>{body}</{outer}>",
        f"<{outer}><{inner}>{body}</{inner}>{body}</{outer}>",
        f"<{outer}>{body}</{inner}>{body}</{outer}>",  # Mismatched closer
        f"<{outer}>{body}",  # Never closed
        f"<{outer.upper()} class=\"x\">{body}</{outer}>",
    ]
    return random.choice(variants)


def fuzz_stray_markup():
    variants = ["<", ">", "<<", "a < b", "a > b", "<>", "< p>", "<!", "<!-", "<?php echo '--'; ?>"]
    return random.choice(variants)


def generate_fuzzed_html():
    """Generate a complete fuzzed document."""
    parts = []
    num_elements = random.randint(1, 20)
    for _ in range(num_elements):
        element_type = random.choices(
            [fuzz_text, fuzz_open_tag, fuzz_close_tag, fuzz_comment, fuzz_skip_region, fuzz_stray_markup],
            weights=[35, 20, 15, 8, 15, 7],
        )[0]
        parts.append(element_type())
    return "".join(parts)


def check_invariants(html, config):
    """Convert one document and return a list of broken invariants."""
    problems = []
    tokens = tokenize(html)
    if "".join(token.content for token in tokens) != html:
        problems.append("tokenize is not lossless")

    converter = Converter(config)
    converter.run(html)
    if len(converter.output) != len(tokens):
        problems.append(f"{len(tokens)} tokens but {len(converter.output)} output pieces")
        return problems

    skip_tags = SkipTagStack()
    for token, piece in zip(tokens, converter.output):
        if isinstance(token, Tag):
            skip_tags.update(token.content)
            if piece != token.content:
                problems.append(f"tag changed: {token.content!r} -> {piece!r}")
        elif skip_tags.active and piece != token.content:
            problems.append(f"skipped text changed: {token.content!r} -> {piece!r}")

    if config == Config.nothing() and "\\" not in html and "".join(converter.output) != html:
        problems.append("do-nothing config changed the input")
    return problems


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    """Run the fuzzer, picking a sample configuration for each document."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    hangs = []
    violations = []
    successes = 0

    print(f"Fuzzing typepants with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()
        config = random.choice(CONFIGS)

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            problems = check_invariants(html, config)
            elapsed = time.perf_counter() - start

            # Check for hangs (>5 seconds)
            if elapsed > 5.0:
                hangs.append({"test_num": i, "html": html, "time": elapsed})
                if verbose:
                    print(f"  HANG: Test {i} took {elapsed:.2f}s")
            elif problems:
                violations.append({"test_num": i, "html": html, "config": config, "problems": problems})
                if verbose:
                    print(f"  VIOLATION: Test {i}: {problems[0]}")
            else:
                successes += 1

        except Exception as e:
            crashes.append({
                "test_num": i,
                "html": html,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")

    elapsed_total = time.time() - start_time

    print(f"\n{'='*60}")
    print("FUZZING RESULTS: typepants")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Violations:     {len(violations)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests/max(elapsed_total, 1e-9):.1f}")

    if crashes:
        print(f"\n{'='*60}")
        print("CRASH DETAILS:")
        print(f"{'='*60}")
        for crash in crashes[:10]:
            print(f"\nTest #{crash['test_num']}:")
            print(f"  HTML: {crash['html'][:200]!r}...")
            print(f"  Error: {crash['error']}")
        if len(crashes) > 10:
            print(f"\n... and {len(crashes) - 10} more crashes")

    if violations:
        print(f"\n{'='*60}")
        print("VIOLATION DETAILS:")
        print(f"{'='*60}")
        for violation in violations[:10]:
            print(f"\nTest #{violation['test_num']} ({violation['config']}):")
            print(f"  HTML: {violation['html'][:200]!r}...")
            for problem in violation["problems"][:3]:
                print(f"  {problem}")

    if hangs:
        print(f"\n{'='*60}")
        print("HANG DETAILS:")
        print(f"{'='*60}")
        for hang in hangs[:5]:
            print(f"\nTest #{hang['test_num']} ({hang['time']:.2f}s):")
            print(f"  HTML: {hang['html'][:200]!r}...")

    if save_failures and (crashes or violations or hangs):
        filename = f"fuzz_failures_typepants_{int(time.time())}.txt"
        with open(filename, "w", encoding="utf-8") as f:
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"HTML:\n{crash['html']}\n")
                f.write(f"Error: {crash['error']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for violation in violations:
                f.write(f"=== VIOLATION #{violation['test_num']} ===\n")
                f.write(f"Config: {violation['config']}\n")
                f.write(f"HTML:\n{violation['html']}\n")
                f.write("\n".join(violation["problems"]) + "\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"HTML:\n{hang['html']}\n\n")
        print(f"\nFailures saved to {filename}")

    return not (crashes or violations or hangs)


def main():
    parser = argparse.ArgumentParser(description="Fuzz typepants with tag soup")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed documents (no conversion)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
