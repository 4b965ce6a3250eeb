import io

from unittest.mock import patch

from pngme.lib.environment import environment
from pngme.lib.png import ChecksumMismatch, ChunkType
from pngme.lib.tools import exception_to_string, get_terminal_size

from .. import TestBase


class TestTools(TestBase):

    def test_exception_without_arguments(self):
        self.assertEqual(exception_to_string(KeyError()), 'KeyError')

    def test_exception_longest_string_argument(self):
        error = ValueError('short', 'this is the longest argument ', 7)
        self.assertEqual(exception_to_string(error), 'this is the longest argument')

    def test_exception_without_string_arguments(self):
        self.assertEqual(exception_to_string(ValueError(7)), '7')
        self.assertEqual(exception_to_string(ValueError(7), 'unknown'), 'unknown')

    def test_exception_from_png_error(self):
        error = ChecksumMismatch(ChunkType.FromString('RuSt'), 0xABD1D84E, 0)
        self.assertEqual(exception_to_string(error), str(error))
        self.assertContains(exception_to_string(error), 'RuSt')

    def test_terminal_size_override(self):
        with patch.object(environment.term_size, 'value', 120):
            self.assertEqual(get_terminal_size(), 120)
        with patch.object(environment.term_size, 'value', -5), \
                patch('sys.stdout', new_callable=io.StringIO), \
                patch('sys.stderr', new_callable=io.StringIO):
            self.assertEqual(get_terminal_size(), 0)
            self.assertEqual(get_terminal_size(80), 80)
