"""Human-readable dump of a recognition pass, for tuning thresholds."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from .bounds import BoundsResolver
from .filtering import DEFAULT_CONFIDENCE_THRESHOLD, filter_by_confidence
from .model import TextRegion


SIZE_MISMATCH_TOLERANCE = 1.0


def generate_debug_info(
    regions: Optional[Sequence[TextRegion]],
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    resolver: Optional[BoundsResolver] = None,
) -> str:
    """Describe every region kept by the confidence filter.

    Doxygen:
    - @param regions: All regions reported by the engine, or None if no pass ran yet.
    - @param confidence_threshold: Threshold used by the filter.
    - @param resolver: Resolver over the kept regions (created if omitted).
    - @return: Multi-line report.
    """
    out: List[str] = [
        "=== OCR layout debug info ===",
        f"Generated: {datetime.now():%Y-%m-%d %H:%M:%S}",
        f"Confidence threshold: {confidence_threshold:.2f}",
    ]
    if regions is None:
        out.append("No recognition result")
        out.append("=== End of debug info ===")
        return "\n".join(out)

    kept = filter_by_confidence(regions, confidence_threshold)
    res = resolver if resolver is not None else BoundsResolver(kept)
    out.append(f"Total regions: {len(regions)}")
    out.append(f"Regions meeting threshold: {len(kept)}")
    if len(regions) > len(kept):
        out.append(f"Filtered as low confidence: {len(regions) - len(kept)}")
    out.append("")

    if not kept:
        out.append("No regions meet the confidence threshold")

    for i, region in enumerate(kept):
        box = region.box
        out.append(f"--- Region {i + 1} ---")
        out.append(f"Text: \"{region.text}\"")
        out.append(f"Confidence: {region.confidence:.4f}")
        out.append(f"Box center: X={box.center_x:.1f}, Y={box.center_y:.1f}")
        out.append(f"Box size: W={box.width:.1f}, H={box.height:.1f}")
        out.append(f"Angle: {box.angle:.2f}")
        if region.corner_points:
            try:
                points = [f"  P{n + 1}: ({float(x):.1f}, {float(y):.1f})"
                          for n, (x, y) in enumerate(region.corner_points)]
            except (TypeError, ValueError) as exc:
                out.append(f"Corner points unreadable: {exc}")
            else:
                out.append("Corner points:")
                out.extend(points)
        bounds = res.resolve(i)
        out.append(f"Bounds: left={bounds.left:.1f}, right={bounds.right:.1f}, top={bounds.top:.1f}, bottom={bounds.bottom:.1f}")
        out.append(f"Bounds size: {bounds.width:.1f} x {bounds.height:.1f}")
        out.append(f"Bounds center: X={bounds.center_x:.1f}, Y={bounds.center_y:.1f}")
        if (abs(abs(box.width) - bounds.width) > SIZE_MISMATCH_TOLERANCE
                or abs(abs(box.height) - bounds.height) > SIZE_MISMATCH_TOLERANCE):
            out.append(
                f"  Warning: reported size {box.width:.1f}x{box.height:.1f} "
                f"differs from corner extent {bounds.width:.1f}x{bounds.height:.1f}"
            )
        out.append("")

    out.append("=== End of debug info ===")
    return "\n".join(out)
