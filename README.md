# openhush

Building blocks for a local voice-to-text "whisper keyboard", the parts that
sit between audio capture and text output:

- `openhush.vad`: voice activity detection state. `VadState` turns a stream
  of per-chunk `VadResult`s into finished `SpeechSegment`s, honouring the
  minimum speech and silence durations in `VadConfig`.
- `openhush.transcription_queue`: `TranscriptionTracker` keeps track of
  pending transcription jobs, applies a `BackpressureStrategy`, and releases
  `TranscriptionResult`s either at once (streaming, with repeated leading
  words removed) or strictly in recording order.
- `openhush.vocabulary`: `VocabularyManager` loads TOML-defined, whole-word
  replacements and applies them to transcribed text, reloading the file when
  it changes.
- `openhush.platform`: `DisplayServer.detect()` and the shared
  `PlatformError`, `HotkeyEvent`, `TrayStatus` and `TrayMenuEvent` types.
- `openhush.tray`: tray status texts and freedesktop icon names,
  `is_tray_supported()`.
- `openhush.paste`: `paste_with_xdotool()` types text at the cursor through
  the `xdotool` command on Linux; `detect_paste_method()`.
- `openhush.crash`: `install()` sets exception hooks that print a crash
  report and append it to `crash.log` in the user data directory.

Python 3.11 or later is required. The only dependency is `platformdirs`.

## Voice activity detection

```python
from openhush.vad import VadConfig, VadResult, VadState

state = VadState(VadConfig(min_silence_ms=100, min_speech_ms=50), 16000)
speech = VadResult(probability=0.8, is_speech=True)
silence = VadResult(probability=0.1, is_speech=False)

state.update(speech, 512)
state.update(speech, 512)
segment = state.update(silence, 1600)
if segment is not None:
    print(segment.start, segment.end, segment.avg_probability)  # 0 1024 ...
```

`update()` returns a segment only when enough silence has followed speech
that lasted at least `min_speech_ms`. `reset()` starts over for a new
recording.

## Transcription queue

```python
from openhush.transcription_queue import (
    BackpressureStrategy,
    TranscriptionResult,
    TranscriptionTracker,
)

tracker = TranscriptionTracker()          # streaming mode
tracker.add_pending(0, 0, max_pending=3, high_water_mark=2,
                    strategy=BackpressureStrategy.DROP_NEWEST)
tracker.add_result(TranscriptionResult(text="hello world", sequence_id=0,
                                       chunk_id=0, is_final=True))
for result in tracker.take_ready():
    print(result.text)
```

When `max_pending` jobs are already pending (0 means unlimited),
`DROP_NEWEST` rejects the new job (`add_pending` returns `False`),
`DROP_OLDEST` drops the lowest `(sequence_id, chunk_id)` to make room, and
`WARN` accepts it anyway. `TranscriptionTracker.ordered()` builds a tracker
that releases results only in sequence order. `stats()` returns a
`QueueStats` with the pending and waiting counts.

## Custom vocabulary

A vocabulary file is TOML; each table is a section with optional `enabled`
(default true) and `case_sensitive` (default false) flags, and every other
key maps a phrase to its replacement:

```toml
[replacements]
case_sensitive = false
"gonna" = "going to"

[acronyms]
case_sensitive = true
"AI" = "artificial intelligence"
```

```python
from openhush.vocabulary import VocabularyManager

manager = VocabularyManager(VocabularyManager.default_path())
manager.load()            # False if the file does not exist
print(manager.apply("I'm gonna explain AI"))
```

Longer phrases are applied before shorter ones, and matches only happen on
whole words. `check_reload()` reloads the file if it changed since the last
load. Unreadable or malformed files raise `VocabularyReadError` or
`VocabularyParseError`, both subclasses of `VocabularyError`.

## Crash reports

```python
from openhush import crash

crash.install()
```

After this, an uncaught exception in any thread prints a report to standard
error and appends it to the file given by `crash.crash_report_path()`.
`KeyboardInterrupt` is passed to the default hook.

## What this package does not do

It does not capture audio, run a speech-recognition model or a voice
activity model, listen for global hotkeys, show a tray icon or notifications,
use the clipboard, or run as a daemon. There is no command-line program. The
pieces here are meant to be wired into an application that provides those
parts.