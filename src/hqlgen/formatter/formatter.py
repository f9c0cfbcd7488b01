# -*- encoding: utf-8 -*-
"""
HQL Re-formatter - Normalizes whitespace, keyword casing and line wrapping.

This is a best-effort textual transform driven by line and bracket
heuristics, not a parse/print round trip. Any input string produces
output; malformed HQL is reflowed as well as the heuristics allow.

Pipeline:
1. Lines are grouped into query blocks (QUERY/MIGRATION up to the next
   block) and loose lines (schema, comments).
2. Each block is collapsed to one line, then re-emitted as a header,
   one line per statement, and a final RETURN.
3. Assignment chains are split on top-level '::' with a depth-aware
   splitter; long chains go one step per line, and brace blocks with
   several fields go one field per line.
"""

import re

from hqlgen.syntax.keywords import (
    canonical_step,
    canonical_structural,
    canonical_type,
)


INDENT = "    "

# Chains whose trailing steps all start with one of these stay inline
SHORT_STEP_PREFIXES = ("WHERE", "RANGE", "COUNT", "GROUP_BY", "OUT", "IN")
SHORT_STEP_LENGTH = 20

# Steps kept on the line of the previous step
ATTACHED_STEP_PREFIXES = ("FROM", "TO")

_BLOCK_START = re.compile(r"\b(QUERY|MIGRATION)\b", re.IGNORECASE)
_BLOCK_HEADER = re.compile(r"\b(QUERY|MIGRATION)\b\s+(.*?)\s*=>\s*(.*)", re.IGNORECASE)
_COMMENT_START = ("//", "#", "/*")
_COMMENT_SPLIT = re.compile(r"(//.*|#.*|/\*[\s\S]*?\*/)")
_COMMENT_LOOKAHEAD = re.compile(r"(?=//|#|/\*)")
_STATEMENT_SPLIT = re.compile(r"(?=\b[a-zA-Z_]\w*\s*<-)|(?=\bDROP\b)|(?=//|#|/\*)")
_WORD = re.compile(r"\b([a-zA-Z_]\w*)\b")

_OPENERS = {"(": ")", "<": ">", "{": "}", "[": "]"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}


def format_hql(code: str) -> str:
    """
    Re-format HQL source text.

    Args:
        code: Arbitrary HQL text

    Returns:
        Formatted text, trimmed; empty for empty input
    """
    if not code:
        return ""

    lines = re.split(r"\r?\n", code)
    output: list[str] = []
    buffer: list[str] = []
    in_block = False

    for i, line in enumerate(lines):
        trimmed = line.strip()
        if not trimmed and not in_block:
            continue

        if _BLOCK_START.search(trimmed):
            if in_block:
                output.extend(_format_block(buffer))
                buffer = []
            in_block = True

        if in_block:
            buffer.append(line)
            if _block_ends_after(lines, i):
                output.extend(_format_block(buffer))
                output.append("")
                buffer = []
                in_block = False
        else:
            output.append(capitalize_keywords(trimmed))

    text = "\n".join(output)
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"([A-Z0-9'\"})])\n+(//|#|/\*)", r"\1\n\n\2", text)
    return text.strip()


def _is_comment(text: str) -> bool:
    return text.startswith(_COMMENT_START)


def _block_ends_after(lines: list[str], i: int) -> bool:
    """True if the block containing line i ends with it."""
    if i == len(lines) - 1:
        return True
    for j in range(i + 1, len(lines)):
        following = lines[j].strip()
        if not following:
            continue
        if _BLOCK_START.search(following):
            return True
        if _is_comment(following):
            # A comment directly above the next block belongs to that block
            for k in range(j + 1, len(lines)):
                after = lines[k].strip()
                if after:
                    return bool(_BLOCK_START.search(after))
        return False
    return False


def _split_comments(text: str) -> list[str]:
    parts = _COMMENT_LOOKAHEAD.split(text)
    # Python keeps the empty piece before a match at position 0
    if len(parts) > 1 and not parts[0]:
        parts = parts[1:]
    return parts


def _format_block(lines: list[str]) -> list[str]:
    text = re.sub(r"\s+", " ", " ".join(lines))
    match = _BLOCK_HEADER.search(text)
    if not match:
        return lines

    kind = match.group(1).upper()
    signature = re.sub(r"\s+\(", "(", match.group(2).strip())
    header = f"{kind} {signature} =>"
    body = match.group(3).strip()

    result = [capitalize_keywords(header)]

    return_idx = body.upper().rfind(" RETURN ")
    if return_idx == -1:
        if body:
            result.append(INDENT + capitalize_keywords(body))
        return result

    main_body = body[:return_idx].strip()
    return_part = body[return_idx + len(" RETURN "):].strip()

    statements = [s.strip() for s in _STATEMENT_SPLIT.split(main_body)]
    for statement in statements:
        if not statement:
            continue
        if _is_comment(statement):
            result.append(INDENT + statement)
            continue
        arrow = statement.find("<-")
        if arrow == -1:
            result.append(INDENT + capitalize_keywords(statement))
            continue
        name = statement[:arrow].strip()
        expression = statement[arrow + 2:].strip()
        result.extend(_format_assignment(name, expression))

    return_parts = _split_comments(return_part)
    result.append(f"{INDENT}RETURN {capitalize_keywords(return_parts[0].strip())}")
    if len(return_parts) > 1:
        # Trailing comments are usually section separators
        result.append("")
        result.extend(part.strip() for part in return_parts[1:])

    return result


def _format_assignment(name: str, expression: str) -> list[str]:
    parts = split_top_level(expression, "::")
    formatted = [capitalize_keywords(p) for p in parts]

    expanded = False
    for i, part in enumerate(formatted):
        if "{" in part and "," in part:
            new_part = _expand_braces(part)
            if new_part != part:
                formatted[i] = new_part
                expanded = True

    compact = len(parts) <= 2 or (
        not expanded
        and all(
            p.upper().startswith(SHORT_STEP_PREFIXES) or len(p) < SHORT_STEP_LENGTH
            for p in parts[1:]
        )
    )

    if compact:
        return [f"{INDENT}{name} <- {'::'.join(formatted)}"]

    lines = [f"{INDENT}{name} <- {formatted[0]}"]
    for part in formatted[1:]:
        if part.upper().startswith(ATTACHED_STEP_PREFIXES):
            lines[-1] += f"::{part}"
        else:
            lines.append(f"{INDENT * 2}::{part}")
    return lines


def _expand_braces(text: str) -> str:
    """Put each field of a top-level brace block with several fields on its own line."""
    out = []
    i = 0
    while i < len(text):
        if text[i] != "{":
            out.append(text[i])
            i += 1
            continue
        end = _matching_close(text, i)
        if end == -1:
            out.append(text[i:])
            break
        content = text[i + 1:end]
        fields = [f.strip() for f in split_top_level(content, ",") if f.strip()]
        if len(fields) > 1:
            sep = ",\n" + INDENT * 2
            out.append("{\n" + INDENT * 2 + sep.join(fields) + "\n" + INDENT + "}")
        else:
            out.append(text[i:end + 1])
        i = end + 1
    return "".join(out)


def _matching_close(text: str, start: int) -> int:
    depth = 0
    for i in range(start, len(text)):
        if text[i] == "{":
            depth += 1
        elif text[i] == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def split_top_level(text: str, separator: str) -> list[str]:
    """
    Split text on separator, ignoring separators nested in (), <>, {} or [].

    Unbalanced closers are ignored rather than driving depth negative.
    Empty pieces are dropped.
    """
    pieces: list[str] = []
    current: list[str] = []
    depth = 0
    i = 0
    width = len(separator)
    while i < len(text):
        ch = text[i]
        if ch in _OPENERS:
            # '<-' is an assignment arrow, not a type parameter
            if not (ch == "<" and text[i + 1:i + 2] == "-"):
                depth += 1
        elif ch in _CLOSERS and depth > 0:
            depth -= 1
        if depth == 0 and text.startswith(separator, i):
            pieces.append("".join(current).strip())
            current = []
            i += width
            continue
        current.append(ch)
        i += 1
    tail = "".join(current).strip()
    if tail:
        pieces.append(tail)
    return [p for p in pieces if p]


def capitalize_keywords(text: str) -> str:
    """
    Normalize spacing and keyword casing outside comments.

    - structural keywords are upper-cased wherever they appear
    - traversal, step and math names take their canonical casing in call
      position (after '::' or before '<', '(' or '::')
    - scalar types take their canonical casing in type position (after a
      single ':', '[' or '<', or before ']'); values after ':' inside a
      {...} argument or projection block are not type positions
    - asc/desc become Asc/Desc
    - {name} property accessors are left as written
    """
    if not text:
        return ""

    pieces = _COMMENT_SPLIT.split(text)
    result = []
    for i, piece in enumerate(pieces):
        # Odd indexes are the captured comments
        if i % 2 == 1:
            result.append(piece)
            continue
        result.append(_normalize_code(piece))
    return "".join(result)


def _normalize_code(code: str) -> str:
    code = re.sub(r"\s*::\s*", "::", code)
    code = re.sub(r"\s+", " ", code)
    code = re.sub(r"\(\s+", "(", code)
    code = re.sub(r"\s+\)", ")", code)
    code = re.sub(r"\{\s+", "{", code)
    code = re.sub(r"\s+\}", "}", code)
    code = re.sub(r"\basc\b", "Asc", code, flags=re.IGNORECASE)
    code = re.sub(r"\bdesc\b", "Desc", code, flags=re.IGNORECASE)
    return _WORD.sub(lambda m: _recase_word(m, code), code)


def _recase_word(match: re.Match, code: str) -> str:
    word = match.group(1)
    if word in ("Asc", "Desc"):
        return word

    start, end = match.start(1), match.end(1)
    before = code[:start].rstrip(" ")
    after = code[end:].lstrip(" ")

    # Property accessor: {name}
    if before.endswith("{") and after.startswith("}"):
        return word

    in_call_position = (
        before.endswith("::")
        or after.startswith(("<", "(", "::"))
    )
    if in_call_position:
        step = canonical_step(word)
        if step:
            return step

    structural = canonical_structural(word)
    if structural:
        return structural

    in_type_position = (
        (before.endswith(":") and not before.endswith("::") and not _in_value_block(before))
        or before.endswith(("[", "<"))
        or after.startswith("]")
    )
    if in_type_position:
        scalar = canonical_type(word)
        if scalar:
            return scalar

    return word


def _in_value_block(before: str) -> bool:
    """True if the innermost open bracket is a '{' opened as an argument or projection."""
    depth = 0
    for i in range(len(before) - 1, -1, -1):
        ch = before[i]
        if ch in _CLOSERS:
            # "=>" and "->" are arrows, not closers
            if not (ch == ">" and before[i - 1:i] in ("=", "-")):
                depth += 1
        elif ch in _OPENERS and not (ch == "<" and before[i + 1:i + 2] == "-"):
            if depth:
                depth -= 1
                continue
            if ch != "{":
                return False
            prefix = before[:i].rstrip()
            # A chain step split off on its own starts with its projection
            return not prefix or prefix.endswith(("(", "::", ","))
    return False
