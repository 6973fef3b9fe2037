"""
Integration tests for the run() entry point and the package shortcuts.
"""
import unittest
from dataclasses import fields

import ratsweep
from ratsweep import ExtendedRational, Point, Segment, SweepConfig, run
from ratsweep.profiling import _PROFILING_COMPILED_OUT, is_profiling_enabled
from tests.test_fixtures import assert_array_points, assert_points_equal, parse
from tests.test_fixtures.segments import POLYGON, STAR


class EngineTests(unittest.TestCase):
    """Tests for run() with its modes, methods and options"""

    def setUp(self):
        self.cross = parse("0 0 4 4   0 4 4 0")

    # ========================================================================
    # MODES AND METHODS
    # ========================================================================

    def testDefaultFindsAll(self):
        result = run(parse(POLYGON))
        assert_points_equal(self, result.points, [(3, 0), (4, 8), (8, 5), (5, 2), (6, 2), (5, 1)])
        self.assertEqual(result.point, Point(3, 0), "Smallest point in (x, y) order")
        self.assertTrue(result.found)
        self.assertIsNone(result.timings)

    def testFirstMode(self):
        result = run(self.cross, mode='first')
        self.assertEqual(result.point, Point(2, 2))
        self.assertEqual(result.intersections, {Point(2, 2): set(self.cross)})

    def testNothingFound(self):
        for mode in ('all', 'first'):
            with self.subTest(mode=mode):
                result = run(parse("0 0 1 0   0 1 1 1"), mode=mode)
                self.assertFalse(result.found)
                self.assertEqual(result.intersections, {})
                self.assertEqual(result.stats['intersection_count'], 0)

    def testNaiveMethodAgrees(self):
        segments = parse(STAR)
        sweep = run(segments)
        naive = run(segments, method='naive')
        self.assertEqual(sweep.intersections, naive.intersections)
        self.assertEqual(sweep.point, naive.point)

    def testNaiveFirstIgnoresEndings(self):
        chain = parse("0 0 2 2   2 2 4 0")
        self.assertFalse(run(chain, mode='first', method='naive', ignore_segment_endings=True).found)
        self.assertEqual(run(chain, mode='first', method='naive').point, Point(2, 2))

    def testFirstModeIgnoresEndings(self):
        config = SweepConfig(mode='first', ignore_segment_endings=True)
        self.assertFalse(run(parse("0 0 2 2   2 2 4 0"), config=config).found)
        self.assertEqual(run(parse("0 0 4 0   2 0 2 3"), config=config).point, Point(2, 0))

    # ========================================================================
    # CONFIGURATION
    # ========================================================================

    def testKeywordOverridesConfig(self):
        config = SweepConfig(mode='all')
        result = run(self.cross, config=config, mode='first')
        self.assertEqual(config.mode, 'first')
        self.assertEqual(result.point, Point(2, 2))

    def testConfigFieldsAreAllUsed(self):
        """Every field is a run() keyword or read by the sweep"""
        self.assertEqual(
            [f.name for f in fields(SweepConfig)],
            ['mode', 'method', 'ignore_segment_endings', 'profile',
             'check_invariants', 'probe_slope_factor'],
        )

    def testUnknownModeOrMethodRaises(self):
        with self.assertRaises(ValueError):
            run(self.cross, mode='some')
        with self.assertRaises(ValueError):
            run(self.cross, method='gpu')

    def testIgnoreEndingsWithAllModeWarns(self):
        with self.assertWarns(UserWarning):
            result = run(self.cross, ignore_segment_endings=True)
        self.assertEqual(result.points, {Point(2, 2)})

    def testDuplicateSegmentsWarn(self):
        segments = self.cross + [Segment((4, 4), (0, 0))]
        with self.assertWarns(UserWarning):
            result = run(segments)
        self.assertEqual(result.stats['segment_count'], 2)

    def testCheckInvariantsAndProbeFactor(self):
        config = SweepConfig(check_invariants=True, probe_slope_factor=ExtendedRational(50000))
        result = run(parse(STAR), config=config)
        assert_points_equal(self, result.points, [(0, 0), (4, 0), (4, -4)])

    # ========================================================================
    # OUTPUT
    # ========================================================================

    def testStats(self):
        result = run(parse(STAR))
        self.assertEqual(result.stats, {
            'segment_count': 6,
            'intersection_count': 3,
            'max_multiplicity': 5,
        })

    def testToArray(self):
        result = run(parse(POLYGON))
        assert_array_points(self, result.to_array(), [(3, 0), (4, 8), (5, 1), (5, 2), (6, 2), (8, 5)])

    @unittest.skipIf(_PROFILING_COMPILED_OUT, "profiling compiled out")
    def testProfileTimings(self):
        result = run(self.cross, profile=True)
        self.assertIn('bentley_ottmann', result.timings)
        self.assertIn('prepare', result.timings)
        self.assertEqual(result.timings['bentley_ottmann']['count'], 1)
        self.assertFalse(is_profiling_enabled(), "Profiling is switched off after the run")

        first = run(self.cross, mode='first', profile=True)
        self.assertIn('shamos_hoey', first.timings)
        self.assertNotIn('bentley_ottmann', first.timings, "Each profiled run starts clean")


class ShortcutTests(unittest.TestCase):
    """Tests for the package-level shortcut functions"""

    def testShortcuts(self):
        segments = parse("0 0 4 4   0 4 4 0   0 10 1 10")
        self.assertEqual(ratsweep.intersections(segments), {Point(2, 2)})
        self.assertEqual(ratsweep.intersections_map(segments), {Point(2, 2): set(segments[:2])})
        self.assertEqual(ratsweep.intersection(segments), Point(2, 2))
        self.assertTrue(ratsweep.intersection_exists(segments))
        self.assertFalse(ratsweep.intersection_exists(parse("0 0 2 2   2 2 4 0"), True))


if __name__ == '__main__':
    unittest.main()
