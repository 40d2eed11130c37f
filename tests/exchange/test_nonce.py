"""Tests for nonce generation."""

from kraken_trader.exchange.nonce import NonceGenerator, current_time_micros


class TestNonceGenerator:
    """Test strictly increasing nonce issuance."""

    def test_tracks_clock_when_time_advances(self):
        """Test nonces equal the clock value when the clock moves forward."""
        ticks = iter([1_000, 2_000, 3_000])
        nonces = NonceGenerator(clock=lambda: next(ticks))

        assert [nonces.next(), nonces.next(), nonces.next()] == [1_000, 2_000, 3_000]

    def test_same_microsecond_still_increasing(self):
        """Test many nonces within one frozen microsecond stay strictly increasing."""
        nonces = NonceGenerator(clock=lambda: 5_000_000)

        issued = [nonces.next() for _ in range(1000)]

        assert issued[0] == 5_000_000
        assert all(b > a for a, b in zip(issued, issued[1:]))
        assert issued[-1] == 5_000_999

    def test_clock_going_backwards(self):
        """Test a clock step backwards never produces a smaller nonce."""
        ticks = iter([10_000, 9_000, 9_500, 20_000])
        nonces = NonceGenerator(clock=lambda: next(ticks))

        issued = [nonces.next() for _ in range(4)]

        assert issued == [10_000, 10_001, 10_002, 20_000]
        assert nonces.last_issued == 20_000

    def test_default_clock_is_microseconds(self):
        """Test the default clock yields microsecond-scale values."""
        nonces = NonceGenerator()
        first = nonces.next()
        second = nonces.next()

        assert second > first
        # Microseconds since epoch have 16 digits for the foreseeable future
        assert len(str(first)) == len(str(current_time_micros()))
