"""
tests/test_synth.py - Tests for audio/synth.py and audio/filters.py

Pure numpy synthesis: voices, ambient tone, mixer and voice filters.
No audio device needed.
"""

import numpy as np
import pytest

from audio.filters import VoiceFilter
from audio.synth import adsr, sine, sawtooth, VoiceBank, AmbientTone, Mixer
from core.catalog import ActionKind

SR = 48000


def rms(x):
    return float(np.sqrt(np.mean(np.square(x))))


class TestEnvelope:
    """adsr builds a one-shot attack/decay/release envelope."""

    def test_length_and_shape(self):
        env = adsr(0.01, 0.1, 0.3, 0.5, 1.0, SR)
        assert len(env) == int(0.01 * SR) + int(0.1 * SR) + int(0.5 * SR)
        assert env[0] == 0.0
        assert env[-1] == 0.0
        assert env.max() == pytest.approx(1.0, abs=1e-3)

    def test_peak_scales(self):
        env = adsr(0.01, 0.05, 0.2, 0.3, 0.15, SR)
        assert env.max() <= 0.15 + 1e-6


class TestOscillators:
    def test_sine_range(self):
        s = sine(440.0, SR, SR)
        assert s.dtype == np.float32
        assert s.max() <= 1.0 and s.min() >= -1.0

    def test_sawtooth_range(self):
        s = sawtooth(110.0, SR, SR)
        assert s.max() <= 1.0 and s.min() >= -1.0


class TestVoiceBank:
    """One mono buffer per action kind."""

    def test_every_kind_has_a_voice(self):
        bank = VoiceBank(SR, 0.5, rng=np.random.default_rng(0))
        for kind in ActionKind:
            voice = bank.voice_for(kind)
            assert voice.dtype == np.float32
            assert len(voice) > 0
            assert np.all(np.isfinite(voice))
            assert np.abs(voice).max() <= 1.0

    def test_unknown_kind(self):
        bank = VoiceBank(SR)
        with pytest.raises(ValueError):
            bank.voice_for("LIKE")

    def test_master_volume_scales(self):
        loud = VoiceBank(SR, 1.0).voice_for(ActionKind.NEGATIVE)
        quiet = VoiceBank(SR, 0.25).voice_for(ActionKind.NEGATIVE)
        assert rms(quiet) == pytest.approx(rms(loud) * 0.25, rel=1e-3)


class TestAmbientTone:
    """Background water tone driven by the activity meter."""

    def test_block_length(self):
        tone = AmbientTone(SR, 0.5)
        assert len(tone.render(512)) == 512

    def test_silence_reaches_zero(self):
        tone = AmbientTone(SR, 0.5)
        tone.render(512)
        tone.silence()
        tone.render(512)  # ramp down
        assert np.all(tone.render(512) == 0.0)

    def test_restore(self):
        tone = AmbientTone(SR, 0.5)
        tone.silence()
        tone.restore()
        assert tone.amp == pytest.approx(AmbientTone.BASE_AMP * 0.5)

    def test_meter_raises_roughness(self):
        tone = AmbientTone(SR, 0.5)
        amp = tone.amp
        tone.update(1.0)
        assert tone.freq == pytest.approx(72.0)
        assert tone.amp > amp

    def test_phase_continuity(self):
        tone = AmbientTone(SR, 1.0)
        a = tone.render(100)
        b = tone.render(100)
        whole = AmbientTone(SR, 1.0).render(200)
        np.testing.assert_allclose(np.concatenate((a, b)), whole, atol=1e-5)


class TestMixer:
    """Voices are summed block by block until exhausted."""

    def test_mix_and_drain(self):
        mixer = Mixer()
        mixer.add(np.ones(10, dtype=np.float32))
        np.testing.assert_array_equal(mixer.mix(4), np.ones(4))
        mixer.mix(4)
        last = mixer.mix(4)
        np.testing.assert_array_equal(last, [1, 1, 0, 0])
        assert mixer.voices == []

    def test_sum_of_voices(self):
        mixer = Mixer()
        mixer.add(np.full(4, 0.25, dtype=np.float32))
        mixer.add(np.full(4, 0.5, dtype=np.float32))
        np.testing.assert_allclose(mixer.mix(4), np.full(4, 0.75))

    def test_empty_buffer_ignored(self):
        mixer = Mixer()
        mixer.add(np.zeros(0, dtype=np.float32))
        assert mixer.voices == []


class TestVoiceFilter:
    """Butterworth filters applied to whole voice buffers."""

    def test_low_pass_attenuates_highs(self):
        filt = VoiceFilter(SR)
        low = filt.low_pass(sine(50.0, SR, SR), 200.0)
        high = filt.low_pass(sine(5000.0, SR, SR), 200.0)
        # Second half only: skip the filter's start-up transient
        assert rms(low[SR // 2:]) > 0.6
        assert rms(high[SR // 2:]) < 0.01

    def test_band_pass_keeps_center(self):
        filt = VoiceFilter(SR)
        center = filt.band_pass(sine(800.0, SR, SR), 800.0, 10.0)
        off = filt.band_pass(sine(4000.0, SR, SR), 800.0, 10.0)
        assert rms(center[SR // 2:]) > 0.5
        assert rms(center[SR // 2:]) > 10 * rms(off[SR // 2:])

    def test_length_and_dtype_preserved(self):
        filt = VoiceFilter(SR)
        out = filt.low_pass(np.ones(1001), 100.0)
        assert len(out) == 1001
        assert out.dtype == np.float32
        assert len(filt.low_pass(np.zeros(0), 100.0)) == 0

    def test_coefficients_cached(self):
        filt = VoiceFilter(SR)
        filt.low_pass(np.ones(8), 200.0)
        filt.low_pass(np.ones(8), 200.0)
        filt.band_pass(np.ones(8), 800.0, 10.0)
        assert len(filt._sos_cache) == 2

    def test_invalid_parameters(self):
        filt = VoiceFilter(SR)
        with pytest.raises(ValueError):
            filt.low_pass(np.ones(8), 0)
        with pytest.raises(ValueError):
            filt.low_pass(np.ones(8), SR)
        with pytest.raises(ValueError):
            filt.band_pass(np.ones(8), 800.0, 0)
        with pytest.raises(ValueError):
            filt.band_pass(np.ones(8), 30000.0, 10.0)
