"""Render, parse and patch the primary Discord message of a pull request.

The message text is the only place the reconciled PR state lives, so every
update rewrites a whole region located by a fixed marker and leaves the
rest of the text untouched. Canonical layout:

    ## [PR #<number>: <title>](<url>)
    -# `<head>` -> `<base>`

    **Author:** <mention>
    <description, when not blank>

    **Reviewers:** <mentions>        (or the ANSI "no reviewers" block)

    **Status**: <value>
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

THREAD_NAME_LIMIT = 100

AUTHOR_PREFIX = "**Author:**"
REVIEWERS_PREFIX = "**Reviewers:**"
REVIEWERS_LABEL = "Reviewers:"
STATUS_PREFIX = "**Status**:"
WARNING_MARKER = "WARNING::No reviewers assigned"
WARNING_BLOCK = (
    "```ansi",
    "\u001b[2;33mWARNING::No reviewers assigned:\u001b[0m",
    "PR has to be reviewed by another member before merging.",
    "```",
)

# Status values are part of the message wire format: the synchronize
# handler recognises an approved PR by APPROVED_PREFIX.
STATUS_DRAFT = ":pencil: Draft - In Progress"
STATUS_READY = ":eyes: Ready for Review"
APPROVED_PREFIX = ":white_check_mark: Approved"

_TITLE_RE = re.compile(r"^## \[PR #(\d+): (.*)\]\((\S*)\)$")
_BRANCH_RE = re.compile(r"^-# `(.*)` -> `(.*)`$")
_STATUS_LINE_RE = re.compile(r"^\*\*Status\*\*:.*$", re.MULTILINE)


def status_approved(reviewer_mention: str) -> str:
    return f"{APPROVED_PREFIX} by {reviewer_mention}"


def status_changes_requested(reviewer_mention: str) -> str:
    return f":tools: Changes Requested by {reviewer_mention}"


def status_closed(closer_mention: str) -> str:
    return f":closed_book: Closed by {closer_mention}"


def status_merged(merger_mention: str) -> str:
    return f":tada: Merged by {merger_mention}"


@dataclass
class RenderedState:
    """Logical content of the primary message. Author and reviewers hold rendered mentions."""

    number: int
    title: str
    url: str
    head_branch: str
    base_branch: str
    author: str
    status: str
    description: str = ""
    reviewers: list[str] = field(default_factory=list)


def mention(login: str, user_mapping: dict) -> str:
    """Return a Discord mention for a mapped GitHub login, else a plain @login."""
    user_id = user_mapping.get(login)
    return f"<@{user_id}>" if user_id else f"@{login}"


def thread_name(number: int, title: str) -> str:
    return f"PR #{number}: {title}"[:THREAD_NAME_LIMIT]


def quote(text: str) -> str:
    """Prefix every line of text with a Markdown blockquote marker."""
    return "> " + text.replace("\r\n", "\n").replace("\n", "\n> ")


def _normalize_description(description: str | None) -> str:
    if not description or not description.strip():
        return ""
    return description.replace("\r\n", "\n").strip("\n")


def _reviewer_region(mentions: list[str]) -> list[str]:
    if mentions:
        return [f"{REVIEWERS_PREFIX} {' '.join(mentions)}"]
    return list(WARNING_BLOCK)


def render(state: RenderedState) -> str:
    lines = [
        f"## [PR #{state.number}: {state.title}]({state.url})",
        f"-# `{state.head_branch}` -> `{state.base_branch}`",
        "",
        f"{AUTHOR_PREFIX} {state.author}",
    ]
    description = _normalize_description(state.description)
    if description:
        lines += [description, ""]
    lines += _reviewer_region(state.reviewers)
    lines += ["", f"{STATUS_PREFIX} {state.status}", ""]
    return "\n".join(lines)


def build_pr_message(
    *,
    number: int,
    title: str,
    url: str,
    head_branch: str,
    base_branch: str,
    author: str,
    description: str | None,
    reviewer_logins: list[str],
    is_draft: bool,
    user_mapping: dict,
) -> str:
    """Build the initial primary message for a freshly opened pull request."""
    state = RenderedState(
        number=number,
        title=title,
        url=url,
        head_branch=head_branch,
        base_branch=base_branch,
        author=mention(author, user_mapping),
        description=description or "",
        reviewers=[mention(login, user_mapping) for login in reviewer_logins],
        status=STATUS_DRAFT if is_draft else STATUS_READY,
    )
    return render(state)


def _is_reviewer_line(line: str) -> bool:
    return line.lstrip("*").startswith(REVIEWERS_LABEL)


def _find_reviewer_regions(lines: list[str]) -> list[tuple[int, int, bool]]:
    """Return (start, end, canonical) for every reviewer line and warning block, in order.

    canonical is True for a ``**Reviewers:**`` line or a complete four-line
    warning block, the forms render() writes. Looser matches (a description
    line starting with "Reviewers:", a lone marker line) are reported with
    canonical False.
    """
    regions: list[tuple[int, int, bool]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if _is_reviewer_line(line):
            regions.append((i, i + 1, line.startswith(REVIEWERS_PREFIX)))
            i += 1
        elif WARNING_MARKER in line:
            has_open = i > 0 and lines[i - 1].strip() == WARNING_BLOCK[0]
            start = i - 1 if has_open else i
            end = i + 1
            has_sentence = end < len(lines) and lines[end].strip() == WARNING_BLOCK[2]
            if has_sentence:
                end += 1
            has_close = end < len(lines) and lines[end].strip() == WARNING_BLOCK[3]
            if has_close:
                end += 1
            regions.append((start, end, has_open and has_sentence and has_close))
            i = end
        else:
            i += 1
    return regions


def _primary_region(lines: list[str], regions: list[tuple[int, int, bool]]) -> tuple[int, int, bool] | None:
    """Pick the region that holds the reviewer section.

    The section sits between the description and the status line, so the
    last region before the first status line wins, canonical ones first.
    Without a status line every region is a candidate.
    """
    status_idx = next((i for i, line in enumerate(lines) if line.startswith(STATUS_PREFIX)), None)
    candidates = [r for r in regions if status_idx is None or r[0] < status_idx] or regions
    if not candidates:
        return None
    canonical = [r for r in candidates if r[2]]
    return (canonical or candidates)[-1]


def _append(lines: list[str], new_lines: list[str]) -> list[str]:
    # Keep a trailing newline where the text had one.
    if lines and lines[-1] == "":
        return lines[:-1] + new_lines + [""]
    return lines + new_lines


def parse_message(text: str) -> RenderedState:
    """Recover the RenderedState from a primary message.

    Tolerates either reviewer representation. Fields whose marker line is
    missing come back empty.
    """
    lines = text.split("\n")
    number, title, url = 0, "", ""
    head_branch = base_branch = ""
    author_idx = None
    author = ""

    for idx, line in enumerate(lines):
        title_match = _TITLE_RE.match(line)
        if title_match and not title:
            number, title, url = int(title_match.group(1)), title_match.group(2), title_match.group(3)
            continue
        branch_match = _BRANCH_RE.match(line)
        if branch_match and not head_branch:
            head_branch, base_branch = branch_match.group(1), branch_match.group(2)
            continue
        if line.startswith(AUTHOR_PREFIX) and author_idx is None:
            author_idx = idx
            author = line[len(AUTHOR_PREFIX) :].strip()

    primary = _primary_region(lines, _find_reviewer_regions(lines))
    reviewers: list[str] = []
    if primary is not None and _is_reviewer_line(lines[primary[0]]):
        reviewers = lines[primary[0]].split(REVIEWERS_LABEL, 1)[1].strip("* ").split()

    status = current_status(text) or ""

    description = ""
    if author_idx is not None:
        stop = len(lines)
        if primary is not None and primary[0] > author_idx:
            stop = primary[0]
        else:
            for idx in range(author_idx + 1, len(lines)):
                if lines[idx].startswith(STATUS_PREFIX):
                    stop = idx
                    break
        description = "\n".join(lines[author_idx + 1 : stop]).strip("\n")
        if not description.strip():
            description = ""

    return RenderedState(
        number=number,
        title=title,
        url=url,
        head_branch=head_branch,
        base_branch=base_branch,
        author=author,
        description=description,
        reviewers=reviewers,
        status=status,
    )


def patch_reviewers(text: str, reviewer_logins: list[str], user_mapping: dict) -> str:
    """Rewrite the reviewer section with the full current reviewer list.

    Replaces the reviewer section in place and drops any other canonical
    reviewer line or warning block, so the result holds exactly one of the
    two forms. Description lines that merely start with "Reviewers:" are
    left alone. With no region present the section goes right after the
    author line, or at the end of the text when there is no author line
    either.
    """
    lines = text.split("\n")
    new_region = _reviewer_region([mention(login, user_mapping) for login in reviewer_logins])
    regions = _find_reviewer_regions(lines)
    primary = _primary_region(lines, regions)

    if primary is not None:
        out: list[str] = []
        cursor = 0
        for region in regions:
            start, end, canonical = region
            if region != primary and not canonical:
                continue
            out.extend(lines[cursor:start])
            if region == primary:
                out.extend(new_region)
            cursor = end
        out.extend(lines[cursor:])
        return "\n".join(out)

    author_idx = next((i for i, line in enumerate(lines) if line.startswith(AUTHOR_PREFIX)), None)
    if author_idx is not None:
        return "\n".join(lines[: author_idx + 1] + new_region + [""] + lines[author_idx + 1 :])
    return "\n".join(_append(lines, new_region))


def patch_status(text: str, new_status: str) -> str:
    """Set every status line to new_status, inserting one if the text has none.

    A missing status line is placed right after the reviewer section (past
    its trailing blank line), or appended when there is no reviewer section.
    """
    status_line = f"{STATUS_PREFIX} {new_status}"
    patched, count = _STATUS_LINE_RE.subn(lambda _m: status_line, text)
    if count:
        return patched

    lines = text.split("\n")
    primary = _primary_region(lines, _find_reviewer_regions(lines))
    if primary is not None:
        end = primary[1]
        insert_at = end + 1 if end < len(lines) and not lines[end].strip() else end
        lines.insert(insert_at, status_line)
        return "\n".join(lines)
    return "\n".join(_append(lines, [status_line]))


def current_status(text: str) -> str | None:
    """Return the value of the first status line, or None when there is none."""
    match = _STATUS_LINE_RE.search(text)
    if match is None:
        return None
    return match.group(0)[len(STATUS_PREFIX) :].strip()


def is_approved(text: str) -> bool:
    return any(
        line[len(STATUS_PREFIX) :].strip().startswith(APPROVED_PREFIX)
        for line in text.split("\n")
        if line.startswith(STATUS_PREFIX)
    )
