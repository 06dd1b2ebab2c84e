from django.test import SimpleTestCase

from fasting.services.stages import STAGES, classify, current_stage_index


class StageClassifierTests(SimpleTestCase):
    """Tests for mapping elapsed time onto fasting stages"""

    def test_start_of_fast(self):
        """0 hours is the first stage"""
        status = classify(0)
        self.assertEqual(status.current.label, 'Blood Sugar Rising')
        self.assertEqual(status.next.label, 'Blood Sugar Falling')
        self.assertEqual(status.progress, 0)

    def test_thirteen_hours_is_ketosis(self):
        """13 hours sits one sixth of the way from 12h to 18h"""
        status = classify(13 * 3600)
        self.assertEqual(status.current.label, 'Ketosis Starts')
        self.assertEqual(status.next.label, 'Accelerated Fat Burning')
        self.assertAlmostEqual(status.progress, 16.6667, places=3)
        self.assertEqual(status.as_dict()['progress'], 16.7)

    def test_last_stage_is_always_complete(self):
        status = classify(100 * 3600)
        self.assertEqual(status.current.label, 'Growth Hormone Peak')
        self.assertIsNone(status.next)
        self.assertEqual(status.progress, 100)

    def test_threshold_belongs_to_the_new_stage(self):
        """Exactly 24 hours is Autophagy with 0% progress"""
        status = classify(24 * 3600)
        self.assertEqual(status.current.key, 'autophagy')
        self.assertEqual(status.progress, 0)

    def test_negative_elapsed_is_first_stage(self):
        self.assertEqual(current_stage_index(-1), 0)
        self.assertEqual(classify(-60).current.key, 'rising')

    def test_timeline_marks_reached_stages(self):
        """Stages at or below the elapsed time are reached"""
        timeline = classify(18 * 3600).timeline
        self.assertEqual(len(timeline), len(STAGES))
        self.assertEqual([reached for _, reached in timeline], [True, True, True, True, False, False])

    def test_as_dict_is_json_ready(self):
        data = classify(5 * 3600).as_dict()
        self.assertEqual(data['current']['key'], 'falling')
        self.assertEqual(data['next']['key'], 'ketosis')
        self.assertEqual(data['timeline'][1], {
            'key': 'falling', 'label': 'Blood Sugar Falling', 'hours': 4, 'reached': True,
        })
