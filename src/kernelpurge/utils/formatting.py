def human_size(num: float) -> str:
    # simple human-readable size
    val = float(num)
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if abs(val) < 1024.0:
            return f"{val:.1f} {unit}"
        val /= 1024.0
    return f"{val:.1f} PB"


def human_kilobytes(kb: int) -> str:
    return human_size(kb * 1024)
