"""
Cinedle: a daily movie guessing game.
Guess today's movie; every guess reports shared cast, crew, genres and studios plus year, runtime,
budget and box office hints.
"""
