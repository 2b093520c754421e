def format_numbered_lines(
    seq: str, line_width: int = 72, residue_width: int = 1
) -> list[str]:
    """Cut a sequence into lines of line_width characters, each prefixed
    with the 1-based number of its first residue.

    residue_width is the number of characters one residue takes, e.g. 4 for
    "Met-Ala-..." so that numbering counts amino acids, not characters.
    """
    if line_width % residue_width != 0:
        raise ValueError(
            f"Line width {line_width} must be a multiple of the "
            f"residue width {residue_width}"
        )
    number_width = len(str(max(1, len(seq) // residue_width)))
    lines = []
    for start in range(0, len(seq), line_width):
        number = start // residue_width + 1
        lines.append(f"{number:>{number_width}} {seq[start : start + line_width]}")
    return lines
