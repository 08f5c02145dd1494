"""
Dot-segment removal for paths (RFC 3986 §5.2.4).
"""

from typing import List


def remove_dot_segments(path: str) -> str:
    """
    Remove "." and ".." segments from a path.

    Follows the buffer algorithm of RFC 3986 §5.2.4. A ".." that would climb
    above the root is dropped.

    Args:
        path: Path component (percent-encoded form)

    Returns:
        Path without dot segments
    """
    output: List[str] = []
    remaining = path

    while remaining:
        # A: drop leading "../" or "./"
        if remaining.startswith("../"):
            remaining = remaining[3:]
        elif remaining.startswith("./"):
            remaining = remaining[2:]
        # B: "/./" or a trailing "/." becomes "/"
        elif remaining.startswith("/./"):
            remaining = remaining[2:]
        elif remaining == "/.":
            remaining = "/"
        # C: "/../" or a trailing "/.." removes the last output segment
        elif remaining.startswith("/../"):
            remaining = remaining[3:]
            if output:
                output.pop()
        elif remaining == "/..":
            remaining = "/"
            if output:
                output.pop()
        # D: a lone "." or ".." disappears
        elif remaining in (".", ".."):
            remaining = ""
        # E: move the first segment (with its leading "/") to the output
        else:
            start = 1 if remaining.startswith("/") else 0
            end = remaining.find("/", start)
            if end == -1:
                end = len(remaining)
            output.append(remaining[:end])
            remaining = remaining[end:]

    return "".join(output)


def _remove_dot_segments_relative(path: str) -> str:
    """
    Remove dot segments from a relative-path reference.

    Leading ".." segments are kept because they refer to a base that is not
    known yet.
    """
    segments = path.split("/")
    output: List[str] = []
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == ".":
            if last:
                output.append("")
            continue
        if segment == "..":
            if output and output[-1] != "..":
                output.pop()
                if last:
                    output.append("")
            else:
                output.append("..")
            continue
        output.append(segment)

    if output == [""]:
        # Every segment collapsed; "./" still refers to the current directory
        return "./"
    return "/".join(output)


def normalize_path(path: str, has_scheme: bool, has_authority: bool) -> str:
    """
    Remove dot segments while keeping the reference structurally valid.

    Args:
        path: Path in URI form
        has_scheme: Whether the reference has a scheme
        has_authority: Whether the reference has an authority

    Returns:
        Normalized path
    """
    if not path:
        return path

    if not has_scheme and not has_authority and not path.startswith("/"):
        result = _remove_dot_segments_relative(path)
        first_segment = result.split("/", 1)[0]
        if ":" in first_segment:
            # Would otherwise be read as a scheme
            result = "./" + result
        return result

    result = remove_dot_segments(path)
    if not has_authority and result.startswith("//"):
        # Would otherwise be read as an authority
        result = "/." + result
    return result
