"""Tests for mesh deformation and displacement-arrow consumers."""

from __future__ import annotations

import numpy as np
import pytest

from odsynth.domain import MeasurementPoint, VibrationComponent
from odsynth.physics import ArrowPolicy, deform_vertices, displacement_field, vector_arrows


def _roster() -> list[MeasurementPoint]:
    return [
        MeasurementPoint(
            id="m-de",
            position=(0.0, 1.4, 1.0),
            horizontal=VibrationComponent(amplitude=8.0, phase=90.0),
            vertical=VibrationComponent(amplitude=7.5, phase=0.0),
        ),
        MeasurementPoint(id="p-de", position=(0.0, 1.35, 5.5)),
    ]


def test_deform_vertices_adds_field_to_rest_positions() -> None:
    rest = np.asarray([[0.0, 0.0, 0.0], [0.0, 1.4, 1.0], [0.5, 1.0, 4.0]])
    deformed = deform_vertices(rest, 0.3, 110.0, _roster(), 10.0)
    expected = rest + displacement_field(rest, 0.3, 110.0, _roster(), 10.0)

    assert deformed.shape == rest.shape
    assert np.allclose(deformed, expected)


def test_visible_arrow_points_along_displacement() -> None:
    roster = _roster()
    anchor = np.asarray([[0.0, 1.4, 1.0]])
    glyph = vector_arrows(anchor, 0.0, 60.0, roster, 10.0)[0]
    offset = displacement_field(anchor, 0.0, 60.0, roster, 10.0)[0]

    assert glyph.visible
    assert np.linalg.norm(glyph.direction) == pytest.approx(1.0)
    assert np.allclose(glyph.direction * glyph.magnitude, offset)
    assert glyph.length == pytest.approx(glyph.magnitude * 4.0)
    assert np.allclose(glyph.base, anchor[0] + offset)


def test_tiny_displacement_hides_arrow() -> None:
    roster = [MeasurementPoint(id="quiet", position=(0.0, 0.0, 0.0))]
    glyphs = vector_arrows(np.zeros((2, 3)), 1.0, 110.0, roster, 1.0, arrow_policy=ArrowPolicy(min_magnitude=0.001))

    assert len(glyphs) == 2
    for glyph in glyphs:
        assert not glyph.visible
        assert glyph.length == 0.0
        assert np.array_equal(glyph.direction, np.zeros(3))


def test_empty_roster_arrows_are_hidden() -> None:
    glyphs = vector_arrows(np.ones((3, 3)), 0.5, 110.0, [], 10.0)
    assert all(not glyph.visible for glyph in glyphs)
    assert all(np.array_equal(glyph.base, np.ones(3)) for glyph in glyphs)


def test_arrow_glyphs_compare_by_identity() -> None:
    anchors = np.asarray([[0.0, 1.4, 1.0], [0.0, 1.35, 5.5]])
    glyphs = vector_arrows(anchors, 0.2, 110.0, _roster(), 10.0)

    assert glyphs[0] == glyphs[0]
    assert glyphs[0] != glyphs[1]
    assert glyphs.index(glyphs[1]) == 1
