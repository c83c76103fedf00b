"""Field / Section / IniFile behaviour."""

import pytest

from pyinifile import (
    CaseInsensitiveIniFile,
    Comment,
    EntryNotFound,
    Field,
    IniFile,
    Int32,
    InvalidIniValue,
    Section,
    register_converter,
)


class Point:
    def __init__(self, x=0, y=0):
        self.x, self.y = x, y


class TestField:
    def test_default_is_empty(self):
        assert Field().value == ''

    def test_set_and_get(self):
        f = Field()
        f.set(42)
        assert f.get() == '42'
        assert f.get(int) == 42
        assert f.as_(Int32) == 42

    def test_set_returns_field(self):
        f = Field()
        assert f.set(1).set(2) is f

    def test_explicit_type(self):
        assert Field(7, Int32).value == '7'

    def test_implicit_conversions(self):
        assert str(Field('hello')) == 'hello'
        assert int(Field('12')) == 12
        assert float(Field('2.5')) == 2.5
        assert bool(Field('false')) is False
        assert bool(Field('yes')) is True

    def test_text_is_source_of_truth(self):
        f = Field(3.14)
        f.value = 'abc'
        with pytest.raises(InvalidIniValue):
            f.get(float)

    def test_get_into_list(self):
        out = [9]
        ret = Field('1,2').get_into(out, list[int])
        assert ret is out
        assert out == [1, 2]

    def test_get_into_set(self):
        out = {99}
        Field('1,2').get_into(out, set[int])
        assert out == {1, 2}

    def test_get_into_object(self):
        register_converter(
            Point,
            lambda p: f'{p.x}:{p.y}',
            lambda s: Point(*map(int, s.split(':'))))
        out = Point()
        assert Field('3:4').get_into(out) is out
        assert (out.x, out.y) == (3, 4)

    def test_get_into_immutable(self):
        with pytest.raises(TypeError):
            Field('1').get_into(5)

    def test_comment_lazy(self):
        f = Field('v')
        assert not f.has_comment()
        assert f._comment is None
        f.add_comment('note')
        assert f.has_comment()
        assert f.comment.view() == ['; note']

    def test_comment_set_clear(self):
        f = Field('v')
        f.set_comment('a\nb', '#')
        assert f.comment.to_list() == ['# a', '# b']
        f.set_comment('')
        assert not f.has_comment()
        f.add_comment('c')
        f.clear_comment()
        assert f._comment is None

    def test_set_keeps_comment(self):
        f = Field('v')
        f.set_comment('keep me')
        f.set(10)
        assert f.comment.view() == ['; keep me']

    def test_copy_is_independent(self):
        f = Field('v')
        f.set_comment('c')
        g = f.copy()
        g.add_comment('d')
        g.set('w')
        assert f.value == 'v'
        assert f.comment.view() == ['; c']

    def test_equality(self):
        assert Field('a') == Field('a')
        assert Field('a') == 'a'
        f = Field('a')
        f.set_comment('x')
        assert f != Field('a')


class TestSection:
    def test_index_inserts(self):
        s = Section()
        assert 'k' not in s
        s['k']
        assert 'k' in s
        assert s['k'].value == ''

    def test_keys_are_trimmed(self):
        s = Section()
        s['  key \t'] = 5
        assert s.contains('key')
        assert s.at(' key ').get(int) == 5
        assert s.keys() == ['key']

    def test_empty_key_allowed(self):
        s = Section()
        s[''] = 'x'
        assert s.contains('')
        assert s.contains('   ')

    def test_assign_value_keeps_comment(self):
        s = Section()
        s['k'] = 1
        s['k'].set_comment('c')
        s['k'] = 2
        assert s['k'].value == '2'
        assert s['k'].has_comment()

    def test_assign_field_replaces_with_copy(self):
        s = Section()
        s['k'].set_comment('old')
        f = Field('new')
        s['k'] = f
        assert not s['k'].has_comment()
        assert s['k'] is not f

    def test_set_without_value_is_empty(self):
        s = Section()
        s.set('k')
        assert s['k'].value == ''
        ini = IniFile()
        ini.set('t', 'k')
        assert ini.contains('t', 'k')
        assert ini['t']['k'].value == ''

    def test_set_single_and_bulk(self):
        s = Section()
        s.set('a', 1)
        s.set('b', 2, Int32)
        s.set([(' c ', 3), ('d', True)])
        s.set({'e': 'x'})
        assert s.items() == [
            ('a', Field('1')), ('b', Field('2')), ('c', Field('3')),
            ('d', Field('true')), ('e', Field('x'))]

    def test_at_missing(self):
        s = Section(name='sec')
        with pytest.raises(EntryNotFound) as info:
            s.at('nope')
        assert isinstance(info.value, KeyError)
        assert 'sec' in str(info.value)
        assert 'nope' not in s

    def test_get_never_inserts(self):
        s = Section()
        s['k'] = 'v'
        assert s.get('k').value == 'v'
        assert s.get('missing').value == ''
        assert s.get('missing', 55).get(float) == 55.0
        assert 'missing' not in s

    def test_get_returns_copy(self):
        s = Section()
        s['k'] = 'v'
        s.get('k').set('changed')
        assert s['k'].value == 'v'

    def test_get_default_then_wrong_type(self):
        s = Section()
        with pytest.raises(InvalidIniValue):
            s.get('k', 'default').get(int)

    def test_remove(self):
        s = Section()
        s['k'] = 1
        assert s.remove(' k ') is True
        assert s.remove('k') is False
        assert s.empty()

    def test_erase_counts(self):
        s = Section({'a': 1, 'b': 2})
        assert s.erase('a', 'b', 'c') == 2
        assert len(s) == 0

    def test_del_and_pop(self):
        s = Section({'a': 1, 'b': 2})
        del s['a']
        with pytest.raises(EntryNotFound):
            del s['a']
        assert s.pop('b').value == '2'
        assert s.pop('b', None) is None
        with pytest.raises(KeyError):
            s.pop('b')

    def test_snapshots(self):
        s = Section({'a': 1, 'b': 2})
        keys = s.keys()
        for k in keys:
            del s[k]
        assert keys == ['a', 'b']
        assert s.size() == 0

    def test_iteration_order(self):
        s = Section()
        for k in 'zyx':
            s[k] = k
        assert list(s) == ['z', 'y', 'x']
        assert [f.value for f in s.values()] == ['z', 'y', 'x']

    def test_setdefault(self):
        s = Section()
        assert s.setdefault('k', 3).value == '3'
        assert s.setdefault('k', 4).value == '3'

    def test_comment(self):
        s = Section(comment='about')
        assert s.comment.view() == ['; about']
        s.add_comment('more', '#')
        assert s.comment.view() == ['; about', '# more']
        s.clear_comment()
        assert not s.has_comment()

    def test_copy_and_equality(self):
        s = Section({'a': 1}, name='n', comment='c')
        t = s.copy()
        assert t == s
        t['a'] = 2
        assert t != s
        assert s['a'].value == '1'

    def test_str(self):
        assert str(Section(name='db')) == '[db]'


class TestIniFile:
    def test_index_inserts(self):
        ini = IniFile()
        ini['section']['key'] = 'hello world'
        assert ini.contains('section')
        assert ini.contains('section', 'key')
        assert not ini.contains('section_no')
        assert not ini.contains('section_no', 'key')
        assert not ini.contains('section', 'key_no')
        assert ini['section'].size() == 1
        assert ini['section01'].size() == 0
        assert ini.size() == 2

    def test_contains_never_inserts(self):
        ini = IniFile()
        ini.contains('a', 'b')
        assert ini.empty()

    def test_at(self):
        ini = IniFile()
        ini['section']['key'] = 3.14
        assert ini.at('section').at('key').get(float) == 3.14
        with pytest.raises(EntryNotFound):
            ini.at('section_no')
        with pytest.raises(EntryNotFound):
            ini.at('section').at('key_no')

    def test_get(self):
        ini = IniFile()
        assert ini.get('s', 'k', 'default').value == 'default'
        assert ini.get('s', 'k', 55).get(float) == 55.0
        assert ini.get('s', 'k').value == ''
        assert ini.empty()
        ini.set('s', 'k', 1)
        assert ini.get('s', 'k', 2).get(int) == 1

    def test_set(self):
        ini = IniFile()
        ini.set('section', 'key', 100)
        ini.set(' section ', 'key1', 101, Int32)
        ini.set('other', {'a': 1, 'b': 2})
        assert ini['section'].keys() == ['key', 'key1']
        assert ini['other']['b'].get(int) == 2

    def test_assign_section_copies(self):
        ini = IniFile()
        src = Section({'k': 'v'}, name='ignored', comment='c')
        ini['s'] = src
        src['k'] = 'changed'
        assert ini['s']['k'].value == 'v'
        assert ini['s'].name == 's'
        assert ini['s'].comment.view() == ['; c']

    def test_assign_mapping(self):
        ini = IniFile()
        ini['s'] = {'a': 1, 'b': True}
        assert ini['s']['b'].value == 'true'

    def test_remove(self):
        ini = IniFile()
        ini['s']
        assert ini.remove('s') is True
        assert ini.remove('s') is False
        with pytest.raises(EntryNotFound):
            del ini['s']

    def test_sections(self):
        ini = IniFile()
        ini['b']
        ini['a']
        assert ini.sections() == ['b', 'a']
        assert [s.name for s in ini.values()] == ['b', 'a']

    def test_header_is_empty_section(self):
        ini = IniFile()
        ini.header['x'] = 1
        assert ini['']['x'].get(int) == 1

    def test_copy(self, sample_ini):
        other = sample_ini.copy()
        assert other == sample_ini
        other['database']['host'] = 'remote'
        assert sample_ini['database']['host'].value == 'localhost'
        assert other != sample_ini

    def test_scenario_c(self):
        ini = IniFile()
        ini['s']['k'] = 42
        assert ini['s']['k'].get(str) == '42'
        assert ini['s']['k'].get(int) == 42


class TestCaseInsensitive:
    TEXT = '[Section]\nKEY=Value\nFlag=123\n'

    def test_lookup_folds_case(self):
        ini = CaseInsensitiveIniFile().from_string(self.TEXT)
        for name in ('Section', 'SECTION', 'section', 'SeCtIoN'):
            assert ini.contains(name)
            assert ini.at(name).contains('key')
        assert ini['SECTION']['flag'].get(int) == 123
        assert ini['section']['Key'].value == 'Value'
        assert ini.size() == 1
        assert ini['section'].size() == 2

    def test_first_spelling_kept(self):
        ini = CaseInsensitiveIniFile()
        ini['Section']['Key'] = 1
        ini['SECTION']['KEY'] = 2
        assert ini.sections() == ['Section']
        assert ini['section'].keys() == ['Key']
        assert ini.to_string() == '[Section]\nKey=2\n'

    def test_remove_any_case(self):
        ini = CaseInsensitiveIniFile().from_string(self.TEXT)
        assert ini['SECTION'].remove('kEy')
        assert ini.remove('section')
        assert ini.empty()

    def test_default_is_case_sensitive(self):
        ini = IniFile().from_string(self.TEXT)
        assert ini.contains('Section')
        assert not ini.contains('section')
        assert not ini.contains('Section', 'key')

    def test_comment_type(self):
        ini = CaseInsensitiveIniFile()
        ini['S'].set_comment('x')
        assert isinstance(ini['s'].comment, Comment)
