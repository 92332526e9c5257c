# bytebeat_dsp

Integer audio processing blocks for a bytebeat groovebox. Every block works on
signed 16-bit samples (plain Python `int`s in -32768..32767) and uses Q15/Q8
fixed-point arithmetic, so a given input always produces the same output. That
makes the blocks easy to test and to drive one sample at a time.

## What is inside

| Module | Contents |
| --- | --- |
| `bytebeat_dsp.dynamics` | `DcBlocker`, `Limiter`, `SoftClip` |
| `bytebeat_dsp.envelope` | `ArEnvelope` (attack/release, with an optional loop mode) and its `Phase` enum |
| `bytebeat_dsp.ring_buffer` | `RingBuffer`, a bounded FIFO of power-of-two size |
| `bytebeat_dsp.waveforms` | `SINE_TABLE_256`, `sine_q15`, `lfsr_next`, `exp_env`, `lin_env` |
| `bytebeat_dsp.chorus` | `Chorus`, a stereo modulated-delay chorus |
| `bytebeat_dsp.hp_filter` | `HpFilter`, `BiquadState`, `HpfCoeff` and the 16-entry `HPF_TABLE` |
| `bytebeat_dsp.snap_gate` | `SnapGate`, a tempo-synced gate that turns sound into ticks |
| `bytebeat_dsp.grain_freeze` | `GrainFreeze`, a loop freezer with forward and reverse playback |
| `bytebeat_dsp.reverb` | `Reverb`, built from `CombFilter` and `AllpassFilter` |
| `bytebeat_dsp.stutter` | `StutterFx`, a buffer-repeat effect |
| `bytebeat_dsp.dsp_chain` | `DspChain`, the full effects chain, and `LevelScaler` |
| `bytebeat_dsp.drums` | `DrumEngine`, `KickVoice`, `SnareVoice`, `HatVoice`, `MiniHPF`, `DrumId`, `DrumFrame`, `color_to_family` |
| `bytebeat_dsp.output` | `pwm_level`, `i2s_frame`, and the `AudioOutput` base with `PwmOutput` / `I2sOutput` |

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from bytebeat_dsp.dsp_chain import DspChain
from bytebeat_dsp.drums import DrumEngine, DrumId

drums = DrumEngine()
drums.set_params(0.0, 0.5, 0.5)   # color, decay, sidechain duck
drums.trigger(DrumId.KICK, 1.0)

chain = DspChain()
chain.set_drive(0.3)

for t in range(44100):
    synth = ((t * (t >> 8 | t >> 9) & 0xFF) - 128) << 7
    drum_l, drum_r, sidechain = drums.process()
    left = max(-32768, min(32767, ((synth * sidechain) >> 15) + drum_l))
    right = max(-32768, min(32767, ((synth * sidechain) >> 15) + drum_r))
    left, right = chain.process(left, right)
```

## Conventions

- Blocks that work on a stereo pair take both samples and return the processed
  pair: `left, right = chain.process(left, right)`. `Limiter.process_stereo`,
  `Chorus.process`, `HpFilter.process`, `SnapGate.process`,
  `GrainFreeze.process`, `StutterFx.process` and `Reverb.process` all work this
  way.
- `DrumEngine.process()` returns a `DrumFrame(left, right, sidechain_q15)`; the
  sidechain value is the kick's Q15 ducking gain (32767 means no ducking).
- Effect parameters such as `amount`, `drive` and `wet` are floats in 0.0..1.0
  and are clamped to that range; `StutterFx.set_rate` clamps to 0.25..4.0 and
  `SnapGate.set_bpm` to 20..300 BPM. `DrumEngine.set_params` leaves a value
  unchanged when it is `None` or negative; only the duck depth is capped at 1.0.
- `RingBuffer.push` raises `OverflowError` when the buffer is full and
  `RingBuffer.pop` raises `IndexError` when it is empty. A buffer of size `n`
  holds `n - 1` items.
- `ArEnvelope.next_gain(gate)` advances the envelope by one sample and returns
  a Q15 gain; apply it to both channels with `ArEnvelope.apply(sample, gain)`.

## Chain order

`DspChain.process` applies its stages in this order:

1. stutter
2. DC blocker
3. high-pass filter
4. snap gate
5. soft clip
6. chorus
7. grain freeze
8. reverb (fed with the mono sum of the frame)
9. stereo-linked limiter

The high-pass filter, snap gate, chorus and reverb are skipped while their
amount (or wet level) is near zero, and the soft clip passes samples through
unchanged at zero drive. The grain freeze runs while its amount is set or while
it is held by `GrainFreeze.force_freeze()`.

## What the package does not do

- It does not evaluate bytebeat expressions, sequence patterns or read
  controls; the caller supplies the synth samples and calls the setters.
- It does not play sound. `PwmOutput` and `I2sOutput` only convert each frame
  (to a pair of PWM duty levels or a packed 32-bit word) and pass it to the
  callable given to their constructor.
- There is no command-line tool.