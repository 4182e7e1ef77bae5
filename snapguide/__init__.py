from .geometry import BoundingBox, Point, union_boxes
from .types import (
    ActiveSnap,
    AlignmentPoint,
    DebugProjection,
    DistanceGuideline,
    DistanceMarker,
    ElementRef,
    Guideline,
)
from .config import SnapColors, SnapConfigError, SnappingConfig, merge_config
from .alignment import ALIGNMENT_ROLES, alignment_points, projection_lines
from .candidates import build_candidate_pool, grid_points, static_elements
from .resolver import AxisMatch, SnapResolution, resolve_snap
from .patterns import AxisPattern, PatternResult, analyze_axis, analyze_patterns, cluster_gaps, pattern_distance
from .state import ActiveSnapState
from .shapes import (
    GeometrySource,
    GroupShape,
    ImageShape,
    PathCommand,
    PathShape,
    ShapeStore,
    TextShape,
    UseShape,
)
from .engine import GuidelineEngine
from .scene import SceneFormatError, load_scene, scene_from_dict

__all__ = [
    'Point',
    'BoundingBox',
    'union_boxes',
    'ActiveSnap',
    'AlignmentPoint',
    'DebugProjection',
    'DistanceGuideline',
    'DistanceMarker',
    'ElementRef',
    'Guideline',
    'SnapColors',
    'SnapConfigError',
    'SnappingConfig',
    'merge_config',
    'ALIGNMENT_ROLES',
    'alignment_points',
    'projection_lines',
    'build_candidate_pool',
    'grid_points',
    'static_elements',
    'AxisMatch',
    'SnapResolution',
    'resolve_snap',
    'AxisPattern',
    'PatternResult',
    'analyze_axis',
    'analyze_patterns',
    'cluster_gaps',
    'pattern_distance',
    'ActiveSnapState',
    'GeometrySource',
    'GroupShape',
    'ImageShape',
    'PathCommand',
    'PathShape',
    'ShapeStore',
    'TextShape',
    'UseShape',
    'GuidelineEngine',
    'SceneFormatError',
    'load_scene',
    'scene_from_dict',
]
