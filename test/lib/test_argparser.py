from pngme.lib.argparser import ArgparseError, ArgumentParserWithSubcommands

from .. import TestBase


class TestArgumentParser(TestBase):

    def parser(self):
        argp = ArgumentParserWithSubcommands(prog='test')
        argp.add_argument('-v', '--verbose', action='count', default=0)
        commands = argp.add_subcommands(dest='command', required=True)
        cmd = commands.add_parser('show')
        cmd.add_argument('file')
        return argp

    def test_valid_arguments(self):
        args = self.parser().parse_args_or_fail(['-vv', 'show', 'image.png'])
        self.assertEqual(args.verbose, 2)
        self.assertEqual(args.command, 'show')
        self.assertEqual(args.file, 'image.png')

    def test_error_does_not_exit(self):
        argp = self.parser()
        with self.assertRaises(ArgparseError) as context:
            argp.parse_args_or_fail(['--unknown'])
        self.assertIs(context.exception.parser, argp)

    def test_subcommand_errors_are_raised(self):
        with self.assertRaises(ArgparseError) as context:
            self.parser().parse_args_or_fail(['show'])
        self.assertIsInstance(context.exception.parser, ArgumentParserWithSubcommands)
        self.assertContains(str(context.exception), 'file')

    def test_missing_subcommand(self):
        with self.assertRaises(ArgparseError):
            self.parser().parse_args_or_fail([])

    def test_argparse_error_is_value_error(self):
        self.assertTrue(issubclass(ArgparseError, ValueError))

    def test_help_formatting(self):
        text = self.parser().format_help()
        self.assertContains(text, '-v, --verbose')
