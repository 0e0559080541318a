"""Tests for the nuclide record schema and record file loading."""

import json

import numpy as np
import pandas as pd
import pytest

from nucchart.data.io import load_records, read_table, save_records
from nucchart.data.records import DecayMode, NuclideRecord, coerce_records, verify_data


# ---------------------------------------------------------------------------
# NuclideRecord
# ---------------------------------------------------------------------------

class TestNuclideRecord:
    def test_neutron_number(self):
        assert NuclideRecord(Z=2, A=4).N == 2

    def test_negative_z_rejected(self):
        with pytest.raises(ValueError):
            NuclideRecord(Z=-1, A=4)

    def test_a_below_z_rejected(self):
        with pytest.raises(ValueError):
            NuclideRecord(Z=5, A=4)

    def test_from_mapping_full(self):
        r = NuclideRecord.from_mapping({
            'Z': 2, 'A': 4, 'Symbol': 'He', 'Yield': 50,
            'HalflifeText': 'stable', 'DecayMode': {'Mode': 'is'},
        })
        assert r.symbol == 'He'
        assert r.yield_ == 50.0
        assert r.halflife_text == 'stable'
        assert r.decay_mode == DecayMode('is')
        assert r.has_yield and r.has_decay_mode

    def test_from_mapping_minimal(self):
        r = NuclideRecord.from_mapping({'Z': 1, 'A': 3})
        assert r.symbol is None
        assert r.yield_ is None
        assert r.decay_mode is None
        assert not r.has_yield

    def test_flat_mode_column(self):
        r = NuclideRecord.from_mapping({'Z': 1, 'A': 3, 'Mode': 'b-'})
        assert r.decay_mode == DecayMode('b-')

    def test_nan_fields_are_missing(self):
        r = NuclideRecord.from_mapping({'Z': 1.0, 'A': 3.0, 'Symbol': np.nan, 'Yield': np.nan})
        assert (r.Z, r.A) == (1, 3)
        assert r.symbol is None
        assert r.yield_ is None

    @pytest.mark.parametrize('entry', [
        {'A': 4},
        {'Z': 2},
        {'Z': 2.5, 'A': 4},
        {'Z': 'two', 'A': 4},
        {'Z': 2, 'A': 4, 'Yield': 'lots'},
    ])
    def test_from_mapping_invalid(self, entry):
        with pytest.raises(ValueError):
            NuclideRecord.from_mapping(entry)

    def test_to_mapping_inverse(self):
        d = {'Z': 2, 'A': 4, 'Symbol': 'He', 'Yield': 50.0,
             'HalflifeText': 'stable', 'DecayMode': {'Mode': 'is'}}
        assert NuclideRecord.from_mapping(d).to_mapping() == d


class TestDecayMode:
    def test_from_string(self):
        assert DecayMode.from_value(' b- ') == DecayMode('b-')

    def test_from_mapping_without_mode(self):
        assert DecayMode.from_value({'Other': 1}) is None

    def test_none(self):
        assert DecayMode.from_value(None) is None


# ---------------------------------------------------------------------------
# verify_data / coerce_records
# ---------------------------------------------------------------------------

class TestVerifyData:
    @pytest.mark.parametrize('data', [None, [], (), pd.DataFrame()])
    def test_empty(self, data):
        assert verify_data(data) is False

    def test_non_empty_list(self):
        assert verify_data([{'Z': 2, 'A': 4}]) is True

    def test_non_empty_dataframe(self):
        assert verify_data(pd.DataFrame({'Z': [2], 'A': [4]})) is True

    def test_generator_is_accepted(self):
        assert verify_data(x for x in [1]) is True


class TestCoerceRecords:
    def test_bad_entries_skipped(self):
        records, rejected = coerce_records([
            {'Z': 2, 'A': 4, 'Symbol': 'He'},
            {'Z': 5, 'A': 4},
            'not a record',
            NuclideRecord(Z=1, A=3, symbol='H'),
        ])
        assert [r.symbol for r in records] == ['He', 'H']
        assert rejected == 2

    def test_dataframe(self):
        df = pd.DataFrame({'Z': [2, 1], 'A': [4, 3], 'Yield': [50.0, np.nan]})
        records, rejected = coerce_records(df)
        assert rejected == 0
        assert records[0].yield_ == 50.0
        assert records[1].yield_ is None

    def test_nuclides_envelope(self):
        records, _ = coerce_records({'nuclides': [{'Z': 2, 'A': 4}]})
        assert len(records) == 1


# ---------------------------------------------------------------------------
# Record files
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_records():
    return [
        NuclideRecord(Z=2, A=4, symbol='He', yield_=50.0, halflife_text='stable',
                      decay_mode=DecayMode('is')),
        NuclideRecord(Z=1, A=3, symbol='H', halflife_text='12.3 y', decay_mode=DecayMode('b-')),
    ]


class TestRecordFiles:
    def test_json_list(self, tmp_path):
        path = tmp_path / 'nuclides.json'
        path.write_text(json.dumps([{'Z': 2, 'A': 4, 'Symbol': 'He'}]))
        records = load_records(path)
        assert records == [NuclideRecord(Z=2, A=4, symbol='He')]

    def test_json_envelope(self, tmp_path):
        path = tmp_path / 'nuclides.json'
        path.write_text(json.dumps({'nuclides': [{'Z': 2, 'A': 4}]}))
        assert len(load_records(path)) == 1

    def test_json_object_without_nuclides(self, tmp_path):
        path = tmp_path / 'nuclides.json'
        path.write_text(json.dumps({'other': []}))
        with pytest.raises(ValueError):
            read_table(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_records(tmp_path / 'missing.json')

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / 'nuclides.txt'
        path.write_text('')
        with pytest.raises(ValueError):
            read_table(path)

    @pytest.mark.parametrize('suffix', ['.json', '.csv', '.parquet'])
    def test_save_and_load(self, tmp_path, sample_records, suffix):
        path = save_records(sample_records, tmp_path / f'nuclides{suffix}')
        assert load_records(path) == sample_records
