import unittest

import pytest

from caged_explorer.clusters import shape_centroid
from caged_explorer.fretboard import generate_scale, notes_by_string, shift_notes
from caged_explorer.reference import (
    blues_shape,
    build_shape_ranges,
    chord_center,
    penta_box,
    shape_fret_ranges,
    shape_notes,
    triad_shape,
)
from caged_explorer.scales import (
    QUALITIES,
    SHAPE_ORDER,
    get_scale,
    scale_semitones,
)
from caged_explorer.shapes import assign_shapes, find_shapes, shapes_adjacent


class TestPentaBox(unittest.TestCase):
    def test_two_notes_per_string_per_octave(self):
        for quality in QUALITIES:
            for shape in SHAPE_ORDER:
                with self.subTest(quality=quality, shape=shape):
                    by_string = notes_by_string(penta_box(quality)[shape])
                    self.assertEqual(sorted(by_string), [1, 2, 3, 4, 5, 6])
                    for string_notes in by_string.values():
                        frets = [n.fret for n in string_notes]
                        self.assertEqual(len(frets), 4)
                        self.assertEqual(frets[2:], [f + 12 for f in frets[:2]])

    def test_positions_shared_by_adjacent_shapes(self):
        for quality in QUALITIES:
            owners = {}
            for shape in SHAPE_ORDER:
                for note in penta_box(quality)[shape]:
                    owners.setdefault((note.string, note.fret), []).append(shape)
            for pos, shapes in owners.items():
                with self.subTest(quality=quality, pos=pos):
                    self.assertLessEqual(len(shapes), 2)
                    if len(shapes) == 2:
                        self.assertTrue(shapes_adjacent(*shapes))

    def test_c_major_c_shape_opens_the_neck(self):
        box = penta_box("major")["C"]
        low = [n for n in box if n.fret < 12]
        self.assertEqual({n.fret for n in low}, {0, 1, 2, 3})

        notes = generate_scale(0, get_scale("pentaMaj"))
        shape_map = assign_shapes(notes, 0, scale_semitones("pentaMaj"))
        for string, string_notes in notes_by_string(low).items():
            first = string_notes[0]
            self.assertEqual(find_shapes(shape_map, string, first.fret)[0], "C")

    def test_chord_centers(self):
        self.assertEqual(chord_center("C"), 1.5)
        self.assertEqual(chord_center("A"), 4.0)
        self.assertEqual(chord_center("E"), 9.0)
        self.assertEqual(chord_center("D"), 11.5)


class TestTriadShape(unittest.TestCase):
    def test_one_note_per_string_per_octave(self):
        for quality in QUALITIES:
            for shape in SHAPE_ORDER:
                for key in range(12):
                    with self.subTest(quality=quality, shape=shape, key=key):
                        shifted = shift_notes(triad_shape(quality)[shape], key)
                        for string_notes in notes_by_string(shifted).values():
                            frets = [n.fret for n in string_notes]
                            for lo, hi in zip(frets, frets[1:]):
                                self.assertEqual(hi - lo, 12)

    def test_chord_tones_only(self):
        self.assertEqual(
            {n.interval for shape in SHAPE_ORDER for n in triad_shape("major")[shape]},
            {"R", "3", "5"},
        )
        self.assertEqual(
            {n.interval for shape in SHAPE_ORDER for n in triad_shape("minor")[shape]},
            {"R", "♭3", "5"},
        )

    def test_c_shape_at_key_zero(self):
        low = [n for n in triad_shape("major")["C"] if n.fret < 12]
        self.assertEqual(
            sorted((n.string, n.fret) for n in low),
            [(1, 0), (2, 1), (3, 0), (4, 2), (5, 3)],
        )


class TestBluesShape(unittest.TestCase):
    def test_blue_note_labels(self):
        for shape in SHAPE_ORDER:
            self.assertEqual({n.interval for n in blues_shape("minor")[shape]}, {"♭5"})
            self.assertEqual({n.interval for n in blues_shape("major")[shape]}, {"♭3"})

    def test_within_box_span(self):
        for quality in QUALITIES:
            for shape in SHAPE_ORDER:
                frets = [n.fret for n in penta_box(quality)[shape]]
                for note in blues_shape(quality)[shape]:
                    self.assertTrue(min(frets) <= note.fret <= max(frets))


class TestShapeRanges(unittest.TestCase):
    def test_two_reference_clusters(self):
        for quality in QUALITIES:
            for shape, clusters in shape_fret_ranges(quality).items():
                with self.subTest(quality=quality, shape=shape):
                    self.assertEqual(len(clusters), 2)
                    self.assertEqual(clusters[1].lo - clusters[0].lo, 12)

    def test_reference_spans(self):
        major = shape_fret_ranges("major")
        self.assertEqual(major["C"][0].span, 3)
        self.assertEqual(major["D"][0].span, 4)

    def test_requires_a_quality(self):
        with self.assertRaises(ValueError):
            build_shape_ranges(0, [])

    def test_no_note_types(self):
        self.assertEqual(shape_notes("major", "C", triads=False, pentatonic=False), [])

    def test_unknown_quality(self):
        with self.assertRaises(ValueError):
            penta_box("dorian")


@pytest.mark.parametrize("quality", QUALITIES)
@pytest.mark.parametrize("key", range(12))
def test_every_shape_has_a_full_cluster(key, quality):
    ranges = build_shape_ranges(key, [quality])
    for shape in SHAPE_ORDER:
        assert any(not c.partial for c in ranges[shape]), shape


@pytest.mark.parametrize("key", range(12))
def test_major_and_relative_minor_share_positions(key):
    major = generate_scale(key, get_scale("pentaMaj"))
    minor = generate_scale((key + 9) % 12, get_scale("pentaMin"))
    assert {(n.string, n.fret) for n in major} == {(n.string, n.fret) for n in minor}


def test_a_minor_triad_centroids_cluster_tightly():
    triads = triad_shape("minor")
    a_shape = shape_centroid(shift_notes(triads["A"], 9))
    g_shape = shape_centroid(shift_notes(triads["G"], 9))
    assert a_shape == pytest.approx(7.0)
    assert g_shape == pytest.approx(65 / 9)
    assert abs(a_shape - g_shape) < 0.5


if __name__ == "__main__":
    unittest.main()
