"""
Field name conversion between the WebUI and Python callers.

The WebUI names fields in snake_case (``num_seeds``, ``added_on``); records
handed to callers use CamelCase display names (``NumSeeds``, ``AddedOn``).
Sort keys and filters are declared with display names and converted back
before they go on the wire.

    >>> to_display_name("num_seeds")
    'NumSeeds'
    >>> to_wire_name("ForceStart")
    'force_start'

Round trips are exact for names whose segments start with a letter, which
covers every name the WebUI uses. Runs of capitals are not treated as
acronyms: every capital starts a new segment, so ``FLPiecePrio`` becomes
``f_l_piece_prio``.
"""


def to_display_name(name: str) -> str:
    """Convert a snake_case wire name to its CamelCase display name."""
    segments = name.split('_')
    if not all(segments):
        raise ValueError(f"Empty name segment in {name!r}")
    return ''.join(segment[0].upper() + segment[1:] for segment in segments)


def to_wire_name(name: str) -> str:
    """Convert a CamelCase display name to its snake_case wire name."""
    if not name:
        raise ValueError("Cannot convert an empty name")

    chunks = [name[0]]
    for char in name[1:]:
        if char.isupper():
            chunks.append('_')
        chunks.append(char)
    return ''.join(chunks).lower()
