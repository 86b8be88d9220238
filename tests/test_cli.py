"""
Unit tests for the memstage command-line tool
"""

import unittest
import tempfile
import os
import sys
import io
import shutil
from unittest.mock import patch

# Add memstage to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from memstage.cli import format_hex_dump, main, parse_env_assignments


class TestCLI(unittest.TestCase):
    """Test subcommands end to end against a temp directory"""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp(prefix='memstage_cli_')

    def tearDown(self):
        if os.path.exists(self.test_dir):
            shutil.rmtree(self.test_dir)

    def run_cli(self, *argv):
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            code = main(list(argv))
        return code, out.getvalue()

    def path(self, name: str) -> str:
        return os.path.join(self.test_dir, name)

    def test_resolve(self):
        code, out = self.run_cli('-e', 'X=/tmp/y', 'resolve', '${X}/f.bin')
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), '/tmp/y/f.bin')

    def test_copy(self):
        with open(self.path('src.bin'), 'wb') as f:
            f.write(b'\x01\x02\x03')

        code, _ = self.run_cli('-e', f'W={self.test_dir}', 'copy', '${W}/src.bin', '${W}/dst.bin')

        self.assertEqual(code, 0)
        with open(self.path('dst.bin'), 'rb') as f:
            self.assertEqual(f.read(), b'\x01\x02\x03')

    def test_copy_missing_source(self):
        code, _ = self.run_cli('copy', self.path('nope.bin'), self.path('dst.bin'))
        self.assertEqual(code, 1)
        self.assertFalse(os.path.exists(self.path('dst.bin')))

    def test_copy_into_save_dir(self):
        os.makedirs(self.path('out'))
        with open(self.path('src.bin'), 'wb') as f:
            f.write(b'abc')

        code, _ = self.run_cli('copy', self.path('src.bin'), '/virtual/dst.bin',
                               '--save-dir', self.path('out'))

        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(os.path.join(self.path('out'), 'dst.bin')))

    def test_append(self):
        target = self.path('log.txt')
        self.assertEqual(self.run_cli('append', target, 'one')[0], 0)
        self.assertEqual(self.run_cli('append', target, 'two')[0], 0)

        with open(target, 'rb') as f:
            self.assertEqual(f.read(), b'onetwo')

    def test_append_to_missing_directory(self):
        code, _ = self.run_cli('append', self.path('no/such/log.txt'), 'x')
        self.assertEqual(code, 1)

    def test_dump(self):
        with open(self.path('d.bin'), 'wb') as f:
            f.write(b'AB\x00')

        code, out = self.run_cli('dump', self.path('d.bin'))

        self.assertEqual(code, 0)
        self.assertIn('41 42 00', out)
        self.assertIn('AB.', out)

    def test_directory_commands(self):
        target = self.path('a/b')
        self.assertEqual(self.run_cli('mkdir', target)[0], 0)
        self.assertTrue(os.path.isdir(target))

        code, out = self.run_cli('ls', self.path('a'))
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), target)

        self.assertEqual(self.run_cli('rmdir', self.path('a'))[0], 0)
        self.assertFalse(os.path.exists(self.path('a')))

    def test_ls_missing_directory_fails(self):
        code, _ = self.run_cli('ls', self.path('absent'))
        self.assertEqual(code, 1)

    def test_demo(self):
        code, _ = self.run_cli('demo', '--workdir', self.test_dir)

        self.assertEqual(code, 0)
        self.assertFalse(os.path.exists(self.path('example.bin')))
        self.assertFalse(os.path.exists(self.path('example_dir')))
        with open(self.path('example.txt'), 'rb') as f:
            self.assertEqual(f.read(), b'Hello, world!')

    def test_no_command_prints_help(self):
        code, out = self.run_cli()
        self.assertEqual(code, 1)
        self.assertIn('usage', out)

    def test_bad_env_assignment_exits(self):
        with patch('sys.stderr', new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                main(['-e', 'NOEQUALS', 'resolve', 'x'])


class TestHelpers(unittest.TestCase):

    def test_parse_env_assignments(self):
        self.assertEqual(parse_env_assignments(['A=1', 'B=x=y']), {'A': '1', 'B': 'x=y'})
        self.assertEqual(parse_env_assignments(None), {})

    def test_format_hex_dump_rows(self):
        dump = format_hex_dump(bytes(range(20)))
        lines = dump.splitlines()

        self.assertEqual(len(lines), 3)
        self.assertIn('00000000', lines[1])
        self.assertIn('00000010', lines[2])


if __name__ == '__main__':
    unittest.main()
