def hexdump(data: bytes, start_address: int = 0, width: int = 16) -> str:
    """
    Render ``data`` hex-editor style, ``width`` bytes per line with an extra
    space every 8 bytes, followed by the printable ASCII column.

    Used to eyeball encoded frames, e.g. ``dropbench HOST PORT --dump``.
    """
    group_size = 8
    # 2 hex chars per byte, single spaces between bytes, one extra space per group
    hex_col_width = width * 2 + (width - 1) + (max(width // group_size, 1) - 1)

    lines = []
    for offset in range(0, len(data), width):
        chunk = data[offset : offset + width]
        hex_bytes = [f"{b:02X}" for b in chunk]
        groups = [hex_bytes[i : i + group_size] for i in range(0, len(hex_bytes), group_size)]
        hex_col = "  ".join(" ".join(g) for g in groups).ljust(hex_col_width)
        ascii_col = "".join((chr(b) if 32 <= b < 127 else ".") for b in chunk)
        lines.append(f"{start_address + offset:08X}  {hex_col}  {ascii_col}")
    return "\n".join(lines)
