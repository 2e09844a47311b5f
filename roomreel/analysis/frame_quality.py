"""
Heuristic "good shot" scoring for live camera frames.

A frame is scored on five criteria (lighting, detail, colour variety,
composition, stability) computed from luminance statistics over a strided
sample of its pixels. The score is advisory UI feedback used to lock framing;
the constants are tuning parameters, not calibrated image-quality measures.
"""

from dataclasses import dataclass
from logging import getLogger

from numpy import abs as np_abs
from numpy import arange, array, count_nonzero, float64, hypot, maximum, ndarray

from roomreel.utils.rng import RandomSource
from roomreel.utils.schemas import AnalysisResult
from roomreel.utils.settings import get_settings

logger = getLogger(__name__)

LUMA_WEIGHTS = array([0.299, 0.587, 0.114], dtype=float64)
MAX_REASONS = 3


@dataclass(frozen=True)
class ScoringConfig:
    sample_stride: int = 4
    edge_threshold: float = 30.0
    center_radius_divisor: float = 6.0
    jitter: float = 5.0
    good_shot_threshold: float = 65.0

    # Lighting
    low_light_max: float = 40.0
    bright_scene_min: float = 220.0
    great_light_min: float = 80.0
    great_light_max: float = 180.0
    great_light_points: float = 30.0
    good_light_points: float = 20.0
    low_light_points: float = 10.0
    bright_scene_points: float = 5.0

    # Detail
    edge_ratio_min: float = 0.05
    edge_ratio_scale: float = 500.0
    detail_max_points: float = 25.0
    simple_scene_points: float = 5.0

    # Colour
    color_variance_min: float = 8.0
    color_variance_divisor: float = 2.0
    color_max_points: float = 25.0
    minimal_color_points: float = 10.0

    # Composition
    center_contrast_min: float = 10.0
    center_focus_points: float = 15.0
    even_composition_points: float = 5.0

    stability_points: float = 15.0

    @classmethod
    def from_settings(cls) -> "ScoringConfig":
        settings = get_settings()
        return cls(
            sample_stride=settings.ROOMREEL_ANALYSIS_SAMPLE_STRIDE,
            edge_threshold=settings.ROOMREEL_ANALYSIS_EDGE_THRESHOLD,
            jitter=settings.ROOMREEL_ANALYSIS_JITTER,
            good_shot_threshold=settings.ROOMREEL_GOOD_SHOT_THRESHOLD,
        )


DEFAULT_SCORING = ScoringConfig()


@dataclass
class FrameMetrics:
    avg_brightness: float
    avg_center_brightness: float
    edge_ratio: float
    avg_color_variance: float
    sample_count: int


def compute_frame_metrics(
    frame: ndarray, sample_stride: int = 4, edge_threshold: float = 30.0, center_radius_divisor: float = 6.0
) -> FrameMetrics:
    """
    Computes the luminance statistics of a (H,W,4) RGBA or (H,W,3) RGB frame,
    sampling every `sample_stride`-th pixel in row-major order.

    An edge is counted when a sampled pixel's luminance differs from the pixel
    immediately before it in the buffer by more than `edge_threshold`.
    """
    if frame.ndim != 3 or frame.shape[-1] not in (3, 4):
        raise ValueError(f"Expected an (H,W,3) or (H,W,4) frame, got shape {frame.shape}")
    if sample_stride < 1:
        raise ValueError(f"sample_stride must be >= 1, got {sample_stride}")
    height, width = frame.shape[:2]
    if height == 0 or width == 0:
        raise ValueError("Frame has no pixels")

    pixels = frame[..., :3].reshape(-1, 3)
    indices = arange(0, height * width, sample_stride)
    sampled = pixels[indices].astype(float64)
    luminance = sampled @ LUMA_WEIGHTS

    # centre brightness over a circle of radius min(w,h)/divisor
    xs = indices % width
    ys = indices // width
    radius = min(width, height) / center_radius_divisor
    in_center = hypot(xs - width / 2, ys - height / 2) <= radius

    neighbours = pixels[maximum(indices - 1, 0)].astype(float64) @ LUMA_WEIGHTS
    is_edge = (indices > 0) & (np_abs(luminance - neighbours) > edge_threshold)

    color_deviation = np_abs(sampled - luminance[:, None]).sum(axis=1)

    sample_count = int(indices.size)
    avg_brightness = float(luminance.mean())
    center_count = int(count_nonzero(in_center))
    if center_count:
        avg_center_brightness = float(luminance[in_center].mean())
    else:
        avg_center_brightness = avg_brightness

    return FrameMetrics(
        avg_brightness=avg_brightness,
        avg_center_brightness=avg_center_brightness,
        edge_ratio=int(count_nonzero(is_edge)) / sample_count,
        avg_color_variance=float(color_deviation.mean()),
        sample_count=sample_count,
    )


def score_frame(
    metrics: FrameMetrics,
    rng: RandomSource,
    config: ScoringConfig = DEFAULT_SCORING,
) -> AnalysisResult:
    reasons: list[str] = []
    score = 0.0

    brightness = metrics.avg_brightness
    if brightness <= config.low_light_max:
        score += config.low_light_points
        reasons.append("Low light")
    elif brightness >= config.bright_scene_min:
        score += config.bright_scene_points
        reasons.append("Bright scene")
    elif config.great_light_min < brightness < config.great_light_max:
        score += config.great_light_points
        reasons.append("Great lighting")
    else:
        score += config.good_light_points
        reasons.append("Good lighting")

    if metrics.edge_ratio > config.edge_ratio_min:
        score += min(config.detail_max_points, metrics.edge_ratio * config.edge_ratio_scale)
        reasons.append("Good detail")
    else:
        score += config.simple_scene_points
        reasons.append("Simple scene")

    if metrics.avg_color_variance > config.color_variance_min:
        score += min(
            config.color_max_points,
            metrics.avg_color_variance / config.color_variance_divisor,
        )
        reasons.append("Color variety")
    else:
        score += config.minimal_color_points
        reasons.append("Minimal colors")

    if abs(metrics.avg_center_brightness - brightness) > config.center_contrast_min:
        score += config.center_focus_points
        reasons.append("Center focus")
    else:
        score += config.even_composition_points
        reasons.append("Even composition")

    score += config.stability_points
    reasons.append("Stable frame")

    if config.jitter:
        score += rng.uniform(-config.jitter, config.jitter)

    confidence = min(max(score, 0.0), 100.0)
    return AnalysisResult(
        is_good_shot=confidence >= config.good_shot_threshold,
        confidence=confidence,
        reasons=reasons[:MAX_REASONS],
    )


def analyze_frame(
    frame: ndarray,
    rng: RandomSource,
    config: ScoringConfig = DEFAULT_SCORING,
) -> AnalysisResult:
    metrics = compute_frame_metrics(
        frame,
        sample_stride=config.sample_stride,
        edge_threshold=config.edge_threshold,
        center_radius_divisor=config.center_radius_divisor,
    )
    logger.debug(
        f"Frame metrics: brightness={metrics.avg_brightness:.1f} "
        f"center={metrics.avg_center_brightness:.1f} "
        f"edges={metrics.edge_ratio:.3f} color={metrics.avg_color_variance:.1f}"
    )
    return score_frame(metrics, rng=rng, config=config)
