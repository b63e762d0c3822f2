# Licensed under the GPLv3 - see LICENSE
from itertools import combinations

import pytest
import numpy as np
from numpy.testing import assert_array_equal
from astropy.table import Table

from .. import (HammingCode, HammingDecoded, redundant_bits_needed, encode,
                syndrome, decode_and_correct, decode, extract_data)
from ...base.errors import UncorrectableSyndromeError


DATA = ['', '1', '0', '1011', '0000', '101100011', '1101011011',
        '11111111111', '100000000000000000000000000001']


def to_array(string):
    return np.array([int(bit) for bit in string], 'u1')


@pytest.mark.parametrize(
    ('m', 'r'),
    ((0, 1), (1, 2), (2, 3), (4, 3), (5, 4), (9, 4), (11, 4), (12, 5),
     (26, 5), (27, 6), (57, 6), (58, 7)))
def test_redundant_bits_needed(m, r):
    assert redundant_bits_needed(m) == r
    assert 2 ** r >= m + r + 1
    # Minimal: one fewer is not enough, except that r is at least 1.
    assert r == 1 or 2 ** (r - 1) < m + r


def test_redundant_bits_needed_invalid():
    with pytest.raises(ValueError):
        redundant_bits_needed(-1)
    with pytest.raises(TypeError):
        redundant_bits_needed(1.5)


class TestReferencePacket:
    def setup_method(self):
        self.data = '101100011'
        self.packet = '1110011000011'

    def test_encode(self):
        packet = encode(self.data)
        assert packet == self.packet
        assert len(packet) == 13

    def test_decode_clean(self):
        packet = to_array(self.packet)
        assert decode_and_correct(packet, 4) == 0
        assert_array_equal(packet, to_array(self.packet))

    def test_decode_error(self):
        packet = to_array(self.packet)
        packet[6] ^= 1
        assert decode_and_correct(packet, 4) == 7
        assert_array_equal(packet, to_array(self.packet))

    def test_uncorrectable(self):
        packet = to_array(self.packet)
        packet[[1, 11]] ^= 1
        damaged = packet.copy()
        with pytest.raises(UncorrectableSyndromeError) as excinfo:
            decode_and_correct(packet, 4)
        assert excinfo.value.position == 14
        assert_array_equal(excinfo.value.syndrome, [0, 1, 1, 1])
        assert 'P4...P1' in str(excinfo.value)
        # The packet is left as it was.
        assert_array_equal(packet, damaged)

    def test_extract(self):
        assert extract_data(self.packet) == self.data

    def test_table(self):
        table = HammingCode(9).table(self.packet)
        assert isinstance(table, Table)
        assert table.colnames == ['position', 'role', 'bit']
        assert list(table['position']) == list(range(1, 14))
        assert list(table['role'][:5]) == ['P1', 'P2', 'D1', 'P3', 'D2']
        assert table['role'][7] == 'P4'
        assert table['role'][-1] == 'D9'
        assert_array_equal(table['bit'], to_array(self.packet))


class TestHammingCode:
    def test_layout(self):
        code = HammingCode(4)
        assert len(code) == 7
        assert code.parity_bits == 3
        assert_array_equal(code.positions, np.arange(1, 8))
        assert_array_equal(code.parity_mask, [True, True, False, True,
                                              False, False, False])
        assert code.coverage.shape == (3, 7)
        assert_array_equal(code.coverage[0], [1, 0, 1, 0, 1, 0, 1])
        assert_array_equal(code.coverage[1], [0, 1, 1, 0, 0, 1, 1])
        assert_array_equal(code.coverage[2], [0, 0, 0, 1, 1, 1, 1])
        assert repr(code) == '<HammingCode data_bits=4, parity_bits=3>'

    def test_hamming_7_4(self):
        code = HammingCode(4)
        assert code.encode('1011') == '0110011'
        packet = code.encode(to_array('1011'))
        assert isinstance(packet, np.ndarray)
        assert_array_equal(packet, to_array('0110011'))
        assert_array_equal(code.syndrome(packet), [0, 0, 0])
        assert_array_equal(code.extract(packet), to_array('1011'))

    def test_correct_in_place(self):
        code = HammingCode(4)
        packet = list(to_array('0110011'))
        packet[4] ^= 1
        assert code.decode_and_correct(packet) == 5
        assert packet == list(to_array('0110011'))
        with pytest.raises(TypeError):
            code.decode_and_correct('0110011')

    def test_decode(self):
        code = HammingCode(4)
        decoded = code.decode('0110111')
        assert isinstance(decoded, HammingDecoded)
        assert decoded.packet == '0110011'
        assert decoded.position == 5
        assert_array_equal(decoded.syndrome, [1, 0, 1])

    def test_wrong_lengths(self):
        code = HammingCode(4)
        with pytest.raises(ValueError):
            code.encode('101')
        with pytest.raises(ValueError):
            code.syndrome('01100110')

    @pytest.mark.parametrize('nbits', [1, 3, 5, 7, 13, 15, 17])
    def test_from_packet_length(self, nbits):
        code = HammingCode.from_packet_length(nbits)
        assert len(code) == nbits

    @pytest.mark.parametrize('nbits', [0, 2, 4, 8, 16])
    def test_from_packet_length_invalid(self, nbits):
        with pytest.raises(ValueError):
            HammingCode.from_packet_length(nbits)


class TestFunctions:
    @pytest.mark.parametrize('data', DATA)
    def test_clean(self, data):
        packet = encode(data)
        r = redundant_bits_needed(len(data))
        assert len(packet) == len(data) + r
        bits = to_array(packet)
        assert decode_and_correct(bits, r) == 0
        assert_array_equal(bits, to_array(packet))
        assert extract_data(packet) == data

    @pytest.mark.parametrize('data', DATA)
    def test_single_errors(self, data):
        packet = to_array(encode(data))
        r = redundant_bits_needed(len(data))
        for position in range(1, len(packet) + 1):
            received = packet.copy()
            received[position - 1] ^= 1
            assert decode_and_correct(received, r) == position
            assert_array_equal(received, packet)

    @pytest.mark.parametrize('data', DATA[3:])
    def test_double_errors(self, data):
        # Two errors are either detected as uncorrectable, or, inevitably
        # for a distance-3 code, miscorrected at a third position.
        packet = to_array(encode(data))
        r = redundant_bits_needed(len(data))
        for p1, p2 in combinations(range(1, len(packet) + 1), 2):
            received = packet.copy()
            received[[p1 - 1, p2 - 1]] ^= 1
            expected = p1 ^ p2
            if expected > len(packet):
                with pytest.raises(UncorrectableSyndromeError):
                    decode_and_correct(received, r)
            else:
                assert decode_and_correct(received, r) == expected
                assert expected not in (p1, p2)
                assert np.count_nonzero(received != packet) == 3

    def test_syndrome(self):
        assert_array_equal(syndrome('0110111', 3), [1, 0, 1])

    def test_decode_does_not_change_input(self):
        received = to_array('0110111')
        decoded = decode(received)
        assert_array_equal(received, to_array('0110111'))
        assert_array_equal(decoded.packet, to_array('0110011'))
        assert decoded.position == 5

    def test_decode_uncorrectable(self):
        with pytest.raises(UncorrectableSyndromeError):
            decode('1010011000010')

    def test_immutable(self):
        with pytest.raises(TypeError):
            decode_and_correct('0110011', 3)
        with pytest.raises(TypeError):
            decode_and_correct((0, 1, 1, 0, 0, 1, 1), 3)

    def test_mismatched_checks(self):
        packet = to_array('1110011000011')
        with pytest.warns(UserWarning, match='parity checks'):
            assert decode_and_correct(packet, 3) == 0
        with pytest.warns(UserWarning):
            syndrome(packet, 5)

    def test_decode_invalid_length(self):
        # No Hamming code has 8-bit packets (7 + 1 would need 4 checks).
        with pytest.warns(UserWarning, match='no Hamming code'):
            decoded = decode('00000000')
        assert decoded.position == 0
        assert len(decoded.syndrome) == 4

    @pytest.mark.parametrize('received', [
        np.array([0., 1., 1., 0., 1., 1., 1.]),
        [0., 1., 1., 0., 1., 1., 1.],
        [False, True, True, False, True, True, True]])
    def test_correct_other_types(self, received):
        assert decode_and_correct(received, 3) == 5
        assert_array_equal(received, to_array('0110011'))
        assert decode(received).position == 0
