# Where: tracksort.features.metadata.usecases.genre.taxonomy
# What: The closed set of canonical genres plus ordered keyword and artist tables.
# Why: Classification must always land on one of a fixed set of top-level folders.

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

from tracksort.shared.errors import ConfigError
from tracksort.shared.track_metadata import DEFAULT_GENRE

CANONICAL_GENRES: Final[tuple[str, ...]] = (
    "Rock",
    "Pop",
    "Electronic",
    "Hip-Hop",
    "R&B",
    "Jazz",
    "Classical",
    "Metal",
    "Country",
    "Folk",
    "Blues",
    "Reggae",
    "Latin",
    "Soundtrack",
    "World",
    "Alternative",
)

# Scan order matters: a keyword containing another genre's keyword is scanned first
# ("dancehall" before "dance", "reggaeton" before "reggae"). Reggae and Pop are split
# so their broad keywords run late.
DEFAULT_KEYWORDS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("Metal", ("metal", "thrash", "grindcore", "deathcore", "djent", "doom")),
    ("Alternative", ("alternative", "alt-rock", "alt rock", "indie", "grunge", "shoegaze", "post-punk", "new wave")),
    ("Reggae", ("dancehall", "rocksteady")),
    ("Pop", ("dance-pop", "chamber pop", "synthpop", "teen pop")),
    ("Rock", ("rock", "punk", "garage", "psychedelic", "britpop")),
    ("Hip-Hop", ("hip hop", "hip-hop", "hiphop", "rap", "grime", "boom bap")),
    (
        "Electronic",
        (
            "electronic",
            "electro",
            "techno",
            "house",
            "trance",
            "edm",
            "dubstep",
            "drum and bass",
            "drum & bass",
            "dnb",
            "ambient",
            "synthwave",
            "downtempo",
            "breakbeat",
            "dance",
        ),
    ),
    ("R&B", ("r&b", "rnb", "r'n'b", "rhythm and blues", "soul", "funk", "motown")),
    ("Jazz", ("jazz", "bebop", "swing", "big band", "fusion")),
    ("Classical", ("classical", "baroque", "symphony", "orchestra", "concerto", "sonata", "opera", "requiem", "chamber")),
    ("Country", ("country", "bluegrass", "americana", "honky tonk")),
    ("Folk", ("folk", "acoustic", "singer-songwriter", "celtic")),
    ("Blues", ("blues",)),
    ("Latin", ("latin", "reggaeton", "salsa", "bachata", "bossa nova", "samba", "tango", "cumbia", "merengue", "flamenco")),
    ("Reggae", ("reggae",)),
    ("Soundtrack", ("soundtrack", "original score", "film score", "motion picture", "video game music", "musical")),
    ("World", ("world", "afrobeat", "k-pop", "j-pop", "bollywood", "fado", "qawwali")),
    ("Pop", ("pop", "chanson")),
)

# Ordered artist lookups; exact matches are tried before containment matches.
DEFAULT_ARTISTS: Final[tuple[tuple[str, str], ...]] = (
    ("Metallica", "Metal"),
    ("Iron Maiden", "Metal"),
    ("Black Sabbath", "Metal"),
    ("Slayer", "Metal"),
    ("Megadeth", "Metal"),
    ("Nirvana", "Alternative"),
    ("Radiohead", "Alternative"),
    ("Pearl Jam", "Alternative"),
    ("Pixies", "Alternative"),
    ("Led Zeppelin", "Rock"),
    ("Pink Floyd", "Rock"),
    ("Queen", "Rock"),
    ("Beatles", "Rock"),
    ("Rolling Stones", "Rock"),
    ("AC/DC", "Rock"),
    ("Foo Fighters", "Rock"),
    ("Eminem", "Hip-Hop"),
    ("Jay-Z", "Hip-Hop"),
    ("Kendrick Lamar", "Hip-Hop"),
    ("Tupac", "Hip-Hop"),
    ("Drake", "Hip-Hop"),
    ("Aphex Twin", "Electronic"),
    ("Deadmau5", "Electronic"),
    ("Chemical Brothers", "Electronic"),
    ("Kraftwerk", "Electronic"),
    ("Beyoncé", "R&B"),
    ("Marvin Gaye", "R&B"),
    ("Stevie Wonder", "R&B"),
    ("Miles Davis", "Jazz"),
    ("John Coltrane", "Jazz"),
    ("Duke Ellington", "Jazz"),
    ("Mozart", "Classical"),
    ("Beethoven", "Classical"),
    ("Bach", "Classical"),
    ("Johnny Cash", "Country"),
    ("Dolly Parton", "Country"),
    ("Bob Dylan", "Folk"),
    ("Muddy Waters", "Blues"),
    ("B.B. King", "Blues"),
    ("Bob Marley", "Reggae"),
    ("Shakira", "Latin"),
    ("Hans Zimmer", "Soundtrack"),
    ("John Williams", "Soundtrack"),
    ("Fela Kuti", "World"),
    ("Madonna", "Pop"),
    ("Taylor Swift", "Pop"),
)


@dataclass(frozen=True, slots=True)
class GenreTaxonomy:
    """Immutable classification tables. Use ``with_overrides`` to customise."""

    canonical: tuple[str, ...] = CANONICAL_GENRES
    keywords: tuple[tuple[str, tuple[str, ...]], ...] = DEFAULT_KEYWORDS
    artists: tuple[tuple[str, str], ...] = DEFAULT_ARTISTS
    default: str = DEFAULT_GENRE

    def __post_init__(self) -> None:
        if self.default not in self.canonical:
            raise ConfigError(f"Default genre {self.default!r} is not canonical")
        for genre, _ in self.keywords:
            self._require_canonical(genre)
        for _, genre in self.artists:
            self._require_canonical(genre)

    def _require_canonical(self, genre: str) -> None:
        if genre not in self.canonical:
            raise ConfigError(f"Unknown genre {genre!r}; expected one of {', '.join(self.canonical)}")

    def with_overrides(
        self,
        keywords: Mapping[str, Sequence[str]] | None = None,
        artists: Mapping[str, str] | None = None,
    ) -> GenreTaxonomy:
        """Return a new taxonomy extended with user tables.

        User artist mappings are consulted before the built-in ones. User
        keywords extend the genre's last entry in place, or are appended as a
        new entry when the genre has none yet.

        Raises:
            ConfigError: If a mapping targets a non-canonical genre.
        """

        merged_keywords = [(genre, list(words)) for genre, words in self.keywords]
        for genre, words in (keywords or {}).items():
            self._require_canonical(genre)
            cleaned = [word.strip().casefold() for word in words if word.strip()]
            for entry_genre, entry_words in reversed(merged_keywords):
                if entry_genre == genre:
                    entry_words.extend(word for word in cleaned if word not in entry_words)
                    break
            else:
                merged_keywords.append((genre, cleaned))

        user_artists: list[tuple[str, str]] = []
        for artist, genre in (artists or {}).items():
            self._require_canonical(genre)
            if artist.strip():
                user_artists.append((artist.strip(), genre))

        return GenreTaxonomy(
            canonical=self.canonical,
            keywords=tuple((genre, tuple(words)) for genre, words in merged_keywords),
            artists=tuple(user_artists) + self.artists,
            default=self.default,
        )


@lru_cache(maxsize=1)
def default_taxonomy() -> GenreTaxonomy:
    """Return the process-wide built-in taxonomy."""

    return GenreTaxonomy()


__all__ = [
    "CANONICAL_GENRES",
    "DEFAULT_ARTISTS",
    "DEFAULT_KEYWORDS",
    "GenreTaxonomy",
    "default_taxonomy",
]
