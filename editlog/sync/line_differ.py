"""Line-range diffing between two snapshots of a file."""

from typing import Callable, Sequence

import structlog

from editlog.models.changes import ChangeSegment, SegmentKind

log = structlog.stdlib.get_logger()


class LineDiffer:
    """Turns two line sequences into Added/Deleted/Modified segments.

    Lines are compared by position, not by longest common subsequence: a
    single pass walks both sequences in step and groups consecutive
    differing lines into runs. A line inserted in the middle of a file
    therefore shows up as modifications of every following line, unless
    it lands on a blank-versus-non-blank boundary.

    A line is "present" when its index is inside the sequence (an empty
    line is present) and "blank" when it is missing or empty. At a
    differing index:

    - old blank, new present: Added
    - old present, new blank: Deleted
    - both non-blank: Modified
    """

    def diff(self, old_lines: Sequence[str], new_lines: Sequence[str]) -> list[ChangeSegment]:
        """
        Compute the ordered change segments between two versions.

        Args:
            old_lines: Lines of the previous version
            new_lines: Lines of the new version

        Returns:
            Segments in ascending line order; empty when the versions match
        """
        segments: list[ChangeSegment] = []
        total = max(len(old_lines), len(new_lines))
        i = 0

        while i < total:
            old, new = _line_at(old_lines, i), _line_at(new_lines, i)
            if old == new:
                i += 1
                continue

            if _is_added(old, new):
                end = self._run_end(old_lines, new_lines, i, total, _is_added)
                segment = ChangeSegment(
                    kind=SegmentKind.ADDED,
                    start_line=i + 1,
                    end_line=end,
                    after_text=_join(new_lines[i:end]),
                )
            elif _is_deleted(old, new):
                end = self._run_end(old_lines, new_lines, i, total, _is_deleted)
                segment = ChangeSegment(
                    kind=SegmentKind.DELETED,
                    start_line=i + 1,
                    end_line=end,
                    before_text=_join(old_lines[i:end]),
                )
            else:
                assert _is_modified(old, new), f"unclassified difference at line {i + 1}"
                end = self._run_end(old_lines, new_lines, i, total, _is_modified)
                segment = ChangeSegment(
                    kind=SegmentKind.MODIFIED,
                    start_line=i + 1,
                    end_line=end,
                    before_text=_join(old_lines[i:end]),
                    after_text=_join(new_lines[i:end]),
                )

            segments.append(segment)
            i = end

        log.debug(
            "lines_diffed",
            old_line_count=len(old_lines),
            new_line_count=len(new_lines),
            segment_count=len(segments),
        )
        return segments

    def _run_end(
        self,
        old_lines: Sequence[str],
        new_lines: Sequence[str],
        start: int,
        total: int,
        condition: Callable[[str | None, str | None], bool],
    ) -> int:
        """Return the index one past the last line satisfying ``condition``."""
        end = start
        while end < total and condition(_line_at(old_lines, end), _line_at(new_lines, end)):
            end += 1
        return end


def _line_at(lines: Sequence[str], index: int) -> str | None:
    return lines[index] if index < len(lines) else None


def _is_added(old: str | None, new: str | None) -> bool:
    return old != new and not old and new is not None


def _is_deleted(old: str | None, new: str | None) -> bool:
    return old != new and old is not None and not new


def _is_modified(old: str | None, new: str | None) -> bool:
    return old != new and bool(old) and bool(new)


def _join(lines: Sequence[str]) -> str:
    return "".join(f"{line}\n" for line in lines)
