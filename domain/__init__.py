"""Describes the lunch broker domain. Centres around the weekly `Menu`.

Why is this hard?

- Menus are written by people, for people. Slide decks carry ordinals,
  shouting capitals, the caterer's signature and the odd Nynorsk weekday.
- The feed is semi-structured but uses its own shape and the same noise.
- Both have to end up as the same canonical, ordered structure.

Everything in here is pure and synchronous. Files and sockets live in
`data.py` and `domain/repository.py`.
"""
