"""Utility functions for CLI output."""

from cli.constants import GREEN, PROGRESS_BAR_WIDTH, RESET


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def render_progress_bar(file_name: str, percentage: float, width: int = PROGRESS_BAR_WIDTH) -> str:
    """
    Render a one-line text progress bar.

    Args:
        file_name: Name shown before the bar
        percentage: Progress between 0 and 100 (clamped)
        width: Number of cells in the bar

    Returns:
        e.g. "report.pdf [###############---------------]  50.0%"
    """
    percentage = max(0.0, min(100.0, percentage))
    filled = int(round(width * percentage / 100))
    bar = '#' * filled + '-' * (width - filled)
    return f"{file_name} [{bar}] {GREEN}{percentage:5.1f}%{RESET}"
