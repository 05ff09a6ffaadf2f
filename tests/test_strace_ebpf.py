import unittest
import io
import sys
import os
import tempfile

# Add the src directory to the path so we can import strace_ebpf modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from strace_ebpf import formats, syscalls, trace_sets, utils
from strace_ebpf.formats import OutputFormat, StringArgMode


class TestFormats(unittest.TestCase):

    def test_output_format_names(self):
        self.assertEqual(formats.out_fmt_str2enum('bin'), OutputFormat.BIN)
        self.assertEqual(formats.out_fmt_str2enum('binary'), OutputFormat.BIN)
        self.assertEqual(formats.out_fmt_str2enum('hex'), OutputFormat.HEX_RAW)
        self.assertEqual(formats.out_fmt_str2enum('HEX_SL'), OutputFormat.HEX_SL)
        self.assertEqual(formats.out_fmt_str2enum('Strace'), OutputFormat.STRACE)

    def test_every_advertised_format_resolves(self):
        for name in formats.SUPPORTED_FORMATS:
            self.assertIsInstance(formats.out_fmt_str2enum(name), OutputFormat)

    def test_unknown_output_format(self):
        with self.assertRaises(ValueError):
            formats.out_fmt_str2enum('json')

    def test_string_arg_modes(self):
        self.assertEqual(formats.choose_fnr_mode('fast'), StringArgMode.FAST)
        self.assertEqual(formats.choose_fnr_mode('CONST_N'), StringArgMode.CONST_N)
        self.assertEqual(formats.choose_fnr_mode('full'), StringArgMode.FULL)
        with self.assertRaises(ValueError):
            formats.choose_fnr_mode('')


class TestSyscalls(unittest.TestCase):

    def test_is_a_sc(self):
        for name in ('sys_read', 'SyS_write', '__x64_sys_openat', '__arm64_sys_clone'):
            self.assertTrue(syscalls.is_a_sc(name), name)
        for name in ('vfs_read', 'do_sys_open', 'sys_ni_syscall', '__x64_sys_ni_syscall'):
            self.assertFalse(syscalls.is_a_sc(name), name)

    def test_table_is_sorted_and_unique(self):
        numbers = [sc.num for sc in syscalls.SYSCALLS]
        self.assertEqual(numbers, sorted(set(numbers)))
        names = [sc.name for sc in syscalls.SYSCALLS]
        self.assertEqual(len(names), len(set(names)))

    def test_print_syscalls_table(self):
        out = io.StringIO()
        self.assertEqual(syscalls.print_syscalls_table(out), 1)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), len(syscalls.SYSCALLS))
        self.assertTrue(lines[0].startswith('000: read'))
        self.assertIn('(3 args)', lines[0])

    def test_print_empty_syscalls_table(self):
        out = io.StringIO()
        self.assertEqual(syscalls.print_syscalls_table(out, table=()), 0)
        self.assertEqual(out.getvalue(), '')

    def test_get_sc_list(self):
        with tempfile.NamedTemporaryFile(mode='w', delete=False) as f:
            f.write("sys_read\nvfs_read\n__x64_sys_write\next4_sync_fs [ext4]\n\n")
            source = f.name

        try:
            out = io.StringIO()
            count = syscalls.get_sc_list(out, syscalls.is_a_sc, source=source)
            self.assertEqual(count, 2)
            self.assertEqual(out.getvalue(), "sys_read\n__x64_sys_write\n")

            out = io.StringIO()
            count = syscalls.get_sc_list(out, source=source)
            self.assertEqual(count, 4)
            self.assertIn("ext4_sync_fs\n", out.getvalue())
            self.assertNotIn("[ext4]", out.getvalue())
        finally:
            os.unlink(source)

    def test_get_sc_list_missing_source(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(OSError):
                syscalls.get_sc_list(io.StringIO(), source=os.path.join(tmpdir, 'missing'))


class TestTraceSets(unittest.TestCase):

    def test_every_set_has_members(self):
        for name in trace_sets.TRACE_SETS:
            self.assertTrue(trace_sets.syscalls_in_set(name), name)

    def test_membership(self):
        self.assertIn('openat', trace_sets.syscalls_in_set('file'))
        self.assertIn('kill', trace_sets.syscalls_in_set('signal'))
        self.assertNotIn('read', trace_sets.syscalls_in_set('file'))

    def test_unknown_set(self):
        with self.assertRaises(KeyError):
            trace_sets.syscalls_in_set('bogus')

    def test_fprint_trace_list(self):
        out = io.StringIO()
        trace_sets.fprint_trace_list(out)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 2 * len(trace_sets.TRACE_SETS))
        self.assertTrue(lines[0].startswith('trace=file: '))
        self.assertIn('openat', lines[1])


class TestUtils(unittest.TestCase):

    def test_error_and_info_prefixes(self):
        out = io.StringIO()
        utils.error('bad thing', out)
        utils.info('good thing', out)
        self.assertEqual(out.getvalue(), "ERROR: bad thing\nINFO: good thing\n")


if __name__ == '__main__':
    unittest.main()
