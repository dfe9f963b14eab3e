"""
Test Observation Schemas
========================

Detector document parsing, validation and serialization.

Usage:
    pytest test_schemas.py
"""

import pytest

from funnyface_overlay.schemas import (
    FaceLandmarks,
    FaceObservation,
    FeatureFlags,
    LandmarkRegion,
    NormalizedPoint,
    NormalizedRect,
    OverlayRequest,
    observations_from_dict,
    observations_to_dict,
)


DOCUMENT = {
    "faces": [
        {
            "bounding_box": {"x": 0.25, "y": 0.25, "width": 0.5, "height": 0.5},
            "landmarks": {
                "left_eye": [[0.27, 0.73], [0.33, 0.77]],
                "right_eye": [[0.67, 0.73], [0.73, 0.77]],
                "nose": [[0.45, 0.42], [0.55, 0.58]],
                "outer_lips": [[0.35, 0.2], [0.5, 0.15], [0.65, 0.2], [0.5, 0.25]],
            },
        },
        {
            "bounding_box": {"x": 0.0, "y": 0.0, "width": 0.1, "height": 0.1},
        },
    ]
}


def test_observations_from_dict():
    observations = observations_from_dict(DOCUMENT)

    assert len(observations) == 2
    first, second = observations
    assert first.bounding_box == NormalizedRect(x=0.25, y=0.25, width=0.5, height=0.5)
    assert first.landmarks.region("nose").points == (
        NormalizedPoint(0.45, 0.42),
        NormalizedPoint(0.55, 0.58),
    )
    assert first.landmarks.region("left_eye") is not None
    assert first.landmarks.region("right_eye") is not None
    assert second.landmarks is None


def test_outer_lips_order_preserved():
    observations = observations_from_dict(DOCUMENT)

    lips = observations[0].landmarks.region("outer_lips")
    assert lips.to_list() == [[0.35, 0.2], [0.5, 0.15], [0.65, 0.2], [0.5, 0.25]]


def test_document_round_trip():
    observations = observations_from_dict(DOCUMENT)

    assert observations_to_dict(observations) == DOCUMENT


def test_empty_document():
    assert observations_from_dict({}) == []
    assert observations_from_dict({"faces": []}) == []


def test_point_accepts_dict_form():
    assert NormalizedPoint.from_value({"x": 0.1, "y": 0.2}) == NormalizedPoint(0.1, 0.2)


@pytest.mark.parametrize("value", [[0.1], [0.1, 0.2, 0.3], "ab", {"x": 0.1}, None, ["a", "b"]])
def test_point_rejects_malformed_values(value):
    with pytest.raises(ValueError):
        NormalizedPoint.from_value(value)


def test_rect_rejects_negative_size():
    with pytest.raises(ValueError):
        NormalizedRect(x=0, y=0, width=-0.1, height=0.5)
    with pytest.raises(ValueError):
        NormalizedRect(x=0, y=0, width=0.5, height=-0.1)


def test_rect_allows_out_of_frame_coordinates():
    """Faces partially outside the frame are reported with unclamped boxes."""
    rect = NormalizedRect(x=-0.2, y=0.9, width=0.5, height=0.5)

    assert rect.x == -0.2


@pytest.mark.parametrize("data", [
    {"x": 0, "y": 0, "width": 1},
    {"x": 0, "y": 0, "width": 1, "height": None},
    {"x": "a", "y": 0, "width": 1, "height": 1},
])
def test_rect_from_dict_rejects_malformed(data):
    with pytest.raises(ValueError):
        NormalizedRect.from_dict(data)


def test_empty_region_counts_as_absent():
    landmarks = FaceLandmarks(nose=LandmarkRegion([]))

    assert landmarks.region("nose") is None
    assert landmarks.region("left_eye") is None


def test_unknown_region_name():
    with pytest.raises(KeyError):
        FaceLandmarks().region("eyebrows")


def test_landmarks_ignore_unknown_keys():
    landmarks = FaceLandmarks.from_dict({"nose": [[0.5, 0.5]], "jawline": [[0, 0]]})

    assert len(landmarks.region("nose")) == 1


@pytest.mark.parametrize("face", [
    {},
    {"bounding_box": {"x": 0, "y": 0, "width": 1, "height": 1}, "landmarks": [[0, 0]]},
    {"bounding_box": {"x": 0, "y": 0, "width": 1, "height": 1}, "landmarks": {"nose": "0,0"}},
    {"bounding_box": {"x": 0, "y": 0, "width": 1, "height": 1}, "landmarks": {"nose": [[0]]}},
])
def test_observation_from_dict_rejects_malformed(face):
    with pytest.raises(ValueError):
        FaceObservation.from_dict(face)


@pytest.mark.parametrize("document", [[], {"faces": {}}])
def test_document_rejects_malformed(document):
    with pytest.raises(ValueError):
        observations_from_dict(document)


def test_feature_flags():
    assert FeatureFlags().to_dict() == {"eyes": True, "nose": True, "mouth": True}
    assert FeatureFlags.from_dict({"mouth": False}) == FeatureFlags(eyes=True, nose=True, mouth=False)
    assert not FeatureFlags(eyes=False, nose=False, mouth=False).any_enabled


@pytest.mark.parametrize("data", [{"ears": True}, {"eyes": "yes"}])
def test_feature_flags_reject_invalid(data):
    with pytest.raises(ValueError):
        FeatureFlags.from_dict(data)


def test_overlay_request_freezes_observations():
    observations = observations_from_dict(DOCUMENT)

    request = OverlayRequest(observations=observations)

    assert isinstance(request.observations, tuple)
    assert request.observation_count == 2
    assert request.features == FeatureFlags()
