import io
import logging
import random
import string
import unittest

import pngme


__all__ = ['pngme', 'TestBase']


class TestBase(unittest.TestCase):

    def generate_random_buffer(self, size):
        return bytes(random.randrange(0, 0x100) for _ in range(size))

    def generate_random_text(self, size):
        return ''.join(string.printable[
            random.randrange(0, len(string.printable))] for _ in range(size)).encode('UTF8')

    def generate_png(self, width=8, height=8, color=(0xFF, 0x80, 0x00)) -> bytes:
        from PIL import Image
        image = Image.new('RGB', (width, height), color)
        output = io.BytesIO()
        image.save(output, format='PNG')
        return output.getvalue()

    def setUp(self):
        random.seed(0xBAADF00D)  # guarantee deterministic 'random' buffers
        logging.disable(logging.CRITICAL)

    def tearDown(self):
        logging.disable(logging.NOTSET)

    def assertContains(self, container, member, msg=None):
        self.assertIn(member, container, msg)
