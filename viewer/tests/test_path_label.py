import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame

from pathtrim.settings import AppCfg
from pathtrim.ui.fonts import FontCache, FontKey
from pathtrim.ui.text_measure import MeasurerRegistry
from pathtrim.ui.widgets.path_label import PathLabel
from viewer.scenes.path_list import PathListScene

PATH = "C:\\Users\\alice\\Documents\\report_final_v2.docx"


class TenPx:
    def measure(self, k, text):
        return len(text) * 10.0, 20.0


class TestPathLabel(unittest.TestCase):
    def setUp(self):
        pygame.font.init()
        self.fonts = FontCache()
        self.registry = MeasurerRegistry(TenPx())
        self.label = PathLabel(pygame.Rect(0, 0, 300, 24), FontKey(None, 16), self.fonts, self.registry, sep="\\")

    def test_set_text_trims_and_counts_one_string(self):
        self.label.set_text(PATH)
        self.assertEqual(self.label.text, PATH)
        self.assertEqual(self.label.display_text, "C:\\Use...\\report_final_v2.docx")
        self.assertEqual(self.registry.metrics.strings_processed, 1)
        self.assertGreater(self.registry.metrics.queries, 1)
        self.assertEqual(self.label.filename, "report_final_v2.docx")
        self.assertEqual(self.label.directory, "C:\\Users\\alice\\Documents")

    def test_resize_retrims_the_stored_path(self):
        self.label.set_text(PATH)
        self.label.set_width(110)
        self.assertEqual(self.label.display_text, "..._v2.docx")
        self.label.set_width(1000)
        self.assertEqual(self.label.display_text, PATH)
        self.assertEqual(self.label.text, PATH)
        self.assertEqual(self.registry.metrics.strings_processed, 1)

    def test_same_width_does_not_measure_again(self):
        self.label.set_text(PATH)
        before = self.registry.metrics.queries
        self.label.set_rect(pygame.Rect(10, 10, 300, 24))
        self.assertEqual(self.registry.metrics.queries, before)

    def test_zero_width_or_empty_text_shows_nothing(self):
        self.label.set_width(0)
        self.label.set_text(PATH)
        self.assertEqual(self.label.display_text, "")
        self.assertEqual(self.registry.metrics.queries, 0)
        self.label.set_width(300)
        self.label.set_text("")
        self.assertEqual(self.label.display_text, "")

    def test_labels_with_same_font_share_a_measurer(self):
        other = PathLabel(pygame.Rect(0, 0, 300, 24), FontKey(None, 16), self.fonts, self.registry, sep="\\")
        self.assertIs(other.trimmer.measurer, self.label.trimmer.measurer)
        self.label.set_text(PATH)
        hits = self.registry.metrics.hits
        other.set_text(PATH)
        self.assertGreater(self.registry.metrics.hits, hits)

    def test_draw_blits_inside_rect(self):
        surface = pygame.Surface((400, 40))
        surface.fill((0, 0, 0))
        self.label.color = (255, 255, 255)
        self.label.set_text(PATH)
        self.label.draw(surface)
        self.assertEqual(surface.get_clip(), surface.get_rect())
        lit = any(surface.get_at((x, y))[0] > 0 for x in range(0, 300) for y in range(0, 24))
        self.assertTrue(lit)
        self.assertEqual(tuple(surface.get_at((350, 30)))[:3], (0, 0, 0))

    def test_color_change_rerenders(self):
        surface = pygame.Surface((400, 40))
        self.label.color = (255, 0, 0)
        self.label.set_text(PATH)
        self.label.draw(surface)
        surface.fill((0, 0, 0))
        self.label.color = (0, 255, 0)
        self.label.draw(surface)
        pixels = [surface.get_at((x, y)) for x in range(0, 300) for y in range(0, 24)]
        self.assertTrue(any(p[1] > 0 for p in pixels))
        self.assertFalse(any(p[0] > 0 for p in pixels))


class TestPathListScene(unittest.TestCase):
    def setUp(self):
        pygame.font.init()
        cfg = AppCfg()
        cfg.trim.separator = "\\"
        cfg.paths = [PATH, "README.md"]
        self.registry = MeasurerRegistry(TenPx())
        self.scene = PathListScene(cfg, FontCache(), self.registry)

    def test_layout_fits_labels_to_window(self):
        self.scene.layout((332, 200))
        self.assertEqual([lbl.rect.width for lbl in self.scene.labels], [300, 300])
        self.assertEqual(self.scene.labels[0].display_text, "C:\\Use...\\report_final_v2.docx")
        self.assertEqual(self.scene.labels[1].display_text, "README.md")
        self.assertLess(self.scene.labels[0].rect.bottom, self.scene.labels[1].rect.top)
        self.assertEqual(self.registry.metrics.strings_processed, 2)

    def test_resize_event_retrims(self):
        self.scene.layout((332, 200))
        handled = self.scene.handle_event(pygame.event.Event(pygame.VIDEORESIZE, w=142, h=200, size=(142, 200)), (142, 200))
        self.assertTrue(handled)
        self.assertEqual(self.scene.labels[0].display_text, "..._v2.docx")

    def test_keys_toggle_cache_and_shrink_column(self):
        self.scene.layout((332, 200))
        self.scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_c), (332, 200))
        self.assertFalse(self.registry.is_cache_enabled())
        self.assertIn("cache off", self.scene.status_line())
        self.scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_DOWN), (332, 200))
        self.assertEqual(self.scene.labels[0].rect.width, 280)
        self.assertFalse(self.scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_x), (332, 200)))

    def test_draw(self):
        self.scene.layout((332, 200))
        self.scene.draw(pygame.Surface((332, 200)))


if __name__ == "__main__":
    unittest.main()
