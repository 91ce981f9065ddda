"""iri.paths
Path arithmetic for reference resolution (RFC 3986 sections 5.2.3 and 5.2.4).
"""


def remove_dot_segments(path: str) -> str:
    """Implementation of the "remove_dot_segments" routine from RFC 3986 section 5.2.4"""
    input_buffer: str = path
    # Each entry is one segment with its leading "/", except possibly the first.
    output: list[str] = []
    while len(input_buffer) > 0:
        if input_buffer.startswith(("../", "./")):
            input_buffer = input_buffer[input_buffer.index("/") + 1 :]
        elif input_buffer.startswith("/./") or input_buffer == "/.":
            input_buffer = "/" + input_buffer[3:]
        elif input_buffer.startswith("/../") or input_buffer == "/..":
            input_buffer = "/" + input_buffer[4:]
            if len(output) > 0:
                output.pop()
        elif input_buffer in (".", ".."):
            input_buffer = ""
        else:
            end: int = input_buffer.find("/", 1)
            if end == -1:
                end = len(input_buffer)
            output.append(input_buffer[:end])
            input_buffer = input_buffer[end:]
    return "".join(output)


def merge(base_path: str | None, base_has_authority: bool, path: str) -> str:
    """Implementation of the "merge" routine defined in RFC 3986 section 5.2.3.
    An absent base_path stands for the empty path.
    """
    if path.startswith("/"):
        return path
    if base_has_authority and base_path is None:
        return f"/{path}"
    if base_path is None:
        return path
    dirname, slash, _ = base_path.rpartition("/")
    return dirname + slash + path
