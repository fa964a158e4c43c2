from unittest import TestCase

import numpy
import pytest

from bigmds.util.misc import (
    extend_docstring_from,
    get_seed_sequence,
    get_setting_from_environ,
)


def make_env_setting(d):
    return ",".join([f"{k}={v}" for k, v in d.items()])


class UtilsTests(TestCase):
    """Tests of individual functions in misc"""

    def test_extend_docstring_from(self):
        """docstring of source is prepended, or appended with pre"""

        def source():
            """first line"""

        @extend_docstring_from(source)
        def dest():
            """second line"""

        @extend_docstring_from(source, pre=True)
        def dest_pre():
            """second line"""

        self.assertEqual(dest.__doc__, "first line\nsecond line")
        self.assertEqual(dest_pre.__doc__, "second line\nfirst line")

    def test_get_seed_sequence(self):
        """integers and None produce a SeedSequence, which is returned as is"""
        seq = get_seed_sequence(3)
        self.assertIsInstance(seq, numpy.random.SeedSequence)
        self.assertEqual(seq.entropy, 3)
        self.assertIs(get_seed_sequence(seq), seq)
        self.assertIsInstance(get_seed_sequence(), numpy.random.SeedSequence)


def test_get_setting_from_environ(monkeypatch):
    """correctly recovers environment variables"""
    env_name = "DUMMY_SETTING"
    monkeypatch.delenv(env_name, raising=False)
    assert get_setting_from_environ(env_name, {"num_pos": int}) == {}

    setting = {"num_pos": 2, "num_seq": 4, "name": "blah"}
    single_setting = {"num_pos": 2}
    correct_names_types = {"num_pos": int, "num_seq": int, "name": str}

    for stng in (setting, single_setting):
        monkeypatch.setenv(env_name, make_env_setting(stng))
        got = get_setting_from_environ(env_name, correct_names_types)
        assert got == stng

    # whitespace around names and values is ignored
    monkeypatch.setenv(env_name, " num_pos = 2 , num_seq=4")
    got = get_setting_from_environ(env_name, correct_names_types)
    assert got == {"num_pos": 2, "num_seq": 4}

    # malformed env setting
    monkeypatch.setenv(env_name, make_env_setting(setting).replace("=", ""))
    got = get_setting_from_environ(env_name, correct_names_types)
    assert got == {}


def test_get_setting_from_environ_bad_type(monkeypatch):
    """values that cannot be cast are skipped with a warning"""
    env_name = "DUMMY_SETTING"
    monkeypatch.setenv(env_name, "num_pos=2,name=blah")
    with pytest.warns(UserWarning):
        got = get_setting_from_environ(env_name, {"num_pos": int, "name": float})
    assert got == {"num_pos": 2}
