"""Example session: drag one card across a small board and watch the guides."""

import logging

from snapguide import GuidelineEngine, ImageShape, Point, ShapeStore, TextShape
from snapguide.geometry import BoundingBox


def build_board() -> ShapeStore:
    return ShapeStore(
        [
            ImageShape("card-1", x=40, y=40, width=120, height=80),
            ImageShape("card-2", x=200, y=40, width=120, height=80),
            ImageShape("card-3", x=360, y=40, width=120, height=80),
            TextShape("title", x=40, y=20, content="Sprint board", font_size=14),
            ImageShape("card-4", x=60, y=220, width=120, height=80),
        ],
        viewport=BoundingBox(0, 0, 800, 600),
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    board = build_board()
    engine = GuidelineEngine(board, {"detectionRadius": 6, "showDistanceGuides": True})

    def render(snap):
        if snap is None:
            print("  guides cleared")
            return
        for guide in snap.guidelines:
            print(f"  {guide.orientation} guide at {guide.position:g} ({guide.role})")
        for marker in snap.distance_markers:
            state = "pending" if marker.is_pending else "fixed"
            print(f"  spacing {marker.distance_value:g} at {marker.position.as_tuple()} [{state}]")

    unsubscribe = engine.subscribe(render)
    for proposed in (Point(300, 180), Point(438, 96), Point(516, 43)):
        print(f"drag card-4 to {proposed.as_tuple()}")
        corrected = engine.resolve("card-4", "image", proposed)
        board.move_to("card-4", "image", corrected)
        print(f"  -> placed at {corrected.as_tuple()}")
    engine.end_operation()
    unsubscribe()


if __name__ == "__main__":
    main()
