"""Domain layer (pure logic).

- Keep quiz rules, question generation and scoring here.
- Avoid I/O: no files, no audio playback, no scheduler.
- Randomness is passed in as a numpy Generator so results are reproducible.
"""
