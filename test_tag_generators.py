"""
Tests for the tag pattern generators.
"""

import unittest

from tag_generators import (
    generate_branded_tags,
    generate_broad_tags,
    generate_exact_match_tags,
    generate_misspelling_tags,
    generate_related_tags,
    generate_trending_tags,
    strip_punctuation,
)


def as_pairs(tags):
    return [(t.tag, t.priority) for t in tags]


class TestExactMatchTags(unittest.TestCase):

    def test_concept_title_phrases_and_primary_keywords(self):
        tags = generate_exact_match_tags(
            "Cat Training",
            "How to Train Your Cat Fast",
            ["Cat Training Tips", "kitten training"]
        )

        self.assertEqual(as_pairs(tags), [
            ("cat training", 100),
            ("how to train your cat fast", 95),
            ("how train", 85),
            ("train your", 85),
            ("your cat", 85),
            ("cat fast", 85),
            ("cat training tips", 90),
            ("kitten training", 85),
        ])
        self.assertTrue(all(t.category == "exact" for t in tags))
        self.assertEqual(tags[0].reason, "Main video concept")

    def test_long_title_is_not_a_tag(self):
        title = "The Complete Beginners Guide To Cat Training"
        tags = generate_exact_match_tags("cat training", title)

        self.assertNotIn(title.lower(), [t.tag for t in tags])
        self.assertIn("complete beginners", [t.tag for t in tags])

    def test_title_punctuation_is_stripped(self):
        tags = generate_exact_match_tags("cats", "Cat's Training: 101!")

        phrases = [t.tag for t in tags if t.reason == "Title phrase"]
        self.assertEqual(phrases, ["cats training", "training 101"])
        # The full title keeps its punctuation
        self.assertIn("cat's training: 101!", [t.tag for t in tags])

    def test_phrase_length_bounds(self):
        tags = generate_exact_match_tags("x", "ant bee supercalifragilisticexpialidocious")

        phrases = [t.tag for t in tags if t.reason == "Title phrase"]
        # "ant bee" is 7 chars; the second pair is over 30
        self.assertEqual(phrases, ["ant bee"])

    def test_repeated_words_may_repeat_phrases(self):
        tags = generate_exact_match_tags("x", "cat dog cat dog")

        phrases = [t.tag for t in tags if t.reason == "Title phrase"]
        self.assertEqual(phrases, ["cat dog", "dog cat", "cat dog"])

    def test_primary_priority_goes_negative(self):
        keywords = [f"keyword {i}" for i in range(20)]
        tags = generate_exact_match_tags("concept", None, keywords)

        self.assertEqual(tags[-1].priority, 90 - 19 * 5)
        self.assertLess(tags[-1].priority, 0)


class TestBroadTags(unittest.TestCase):

    def test_concept_words_niche_and_patterns(self):
        tags = generate_broad_tags("Cat Training", "Pets")

        self.assertEqual(as_pairs(tags), [
            ("training", 60),
            ("pets", 65),
            ("pets video", 55),
            ("cat training tutorial", 50),
            ("cat training guide", 48),
            ("cat training how to", 46),
            ("cat training tips", 44),
            ("cat training learn", 42),
        ])

    def test_word_priority_counts_only_kept_words(self):
        tags = generate_broad_tags("a big cat training session")

        words = [(t.tag, t.priority) for t in tags if t.reason == "Concept word"]
        self.assertEqual(words, [("training", 60), ("session", 58)])

    def test_no_niche(self):
        tags = generate_broad_tags("cat")

        self.assertEqual(len(tags), 5)
        self.assertFalse(any(t.reason.startswith("Niche") for t in tags))


class TestRelatedTags(unittest.TestCase):

    def test_secondary_limited_to_five(self):
        secondary = [f"Secondary {i}" for i in range(8)]
        tags = generate_related_tags(secondary, [])

        self.assertEqual(len(tags), 5)
        self.assertEqual([t.priority for t in tags], [70, 67, 64, 61, 58])
        self.assertEqual(tags[0].tag, "secondary 0")

    def test_long_tail_skips_long_phrases(self):
        long_tail = [
            "how to train a cat",
            "how to train a cat to use the toilet in a week",
            "cat clicker training",
        ]
        tags = generate_related_tags([], long_tail)

        self.assertEqual(as_pairs(tags), [
            ("how to train a cat", 65),
            ("cat clicker training", 59),
        ])

    def test_only_first_five_long_tail_considered(self):
        long_tail = ["x" * 40] * 5 + ["short phrase"]
        self.assertEqual(generate_related_tags(None, long_tail), [])


class TestTrendingTags(unittest.TestCase):

    def test_year_and_patterns(self):
        tags = generate_trending_tags("Cat Training", 2030)

        self.assertEqual(as_pairs(tags), [
            ("cat training 2030", 75),
            ("cat training tutorial 2030", 70),
            ("new cat training", 55),
            ("latest cat training", 52),
            ("updated cat training", 49),
            ("best cat training", 46),
        ])
        self.assertTrue(all(t.category == "trending" for t in tags))


class TestBrandedTags(unittest.TestCase):

    def test_channel_is_cleaned(self):
        tags = generate_branded_tags("Pet-Master!", "Cat Training")

        self.assertEqual(as_pairs(tags), [
            ("petmaster", 80),
            ("petmaster cat", 75),
        ])
        self.assertTrue(all(t.category == "branded" for t in tags))

    def test_strip_punctuation_keeps_spaces(self):
        self.assertEqual(strip_punctuation("Pet Master's #1 Channel"), "Pet Masters 1 Channel")


class TestMisspellingTags(unittest.TestCase):

    def test_rules_apply_to_original_word(self):
        tags = generate_misspelling_tags("receive attention")

        self.assertEqual(as_pairs(tags), [
            ("recieve", 28),
            ("attension", 26),
            ("atention", 20),
        ])
        self.assertTrue(all(t.category == "misspellings" for t in tags))

    def test_capped_at_three_overall(self):
        tags = generate_misspelling_tags("committee attention")

        # Both misspellings of the first word come first
        self.assertEqual([t.tag for t in tags], ["committe", "comitee", "attension"])

    def test_short_words_are_skipped(self):
        self.assertEqual(generate_misspelling_tags("tool seen"), [])

    def test_no_change_no_tag(self):
        self.assertEqual(generate_misspelling_tags("training"), [])


if __name__ == '__main__':
    unittest.main()
