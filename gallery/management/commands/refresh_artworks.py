"""
Management command to refresh the artwork cache from Airtable.

Also serves as an Airtable connectivity check: it fails loudly when the
source cannot be reached.

Usage:
    python manage.py refresh_artworks [--include-artist]
"""

from django.core.management.base import BaseCommand, CommandError

from gallery.src.exceptions import SourceUnavailableError
from gallery.src.global_services import get_artist_cache, get_artwork_cache
from gallery.src.services.artwork_cache import count_featured


class Command(BaseCommand):
    help = "Fetch artworks from Airtable into the cache and report counts"

    def add_arguments(self, parser):
        parser.add_argument(
            "--include-artist",
            action="store_true",
            help="Also refresh the artist profile",
        )

    def handle(self, *args, **options):
        self.stdout.write("Fetching artworks from Airtable...")
        try:
            artworks = get_artwork_cache().refresh()
        except SourceUnavailableError as e:
            raise CommandError(f"Failed to refresh cache: {e}")

        if not artworks:
            self.stdout.write(self.style.WARNING("No artworks available"))
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f"Cached {len(artworks)} artworks "
                    f"({count_featured(artworks)} featured)"
                )
            )

        if options["include_artist"]:
            try:
                artist = get_artist_cache().refresh()
            except SourceUnavailableError as e:
                raise CommandError(f"Failed to refresh artist: {e}")
            if artist is None:
                self.stdout.write(self.style.WARNING("Artist not available"))
            else:
                self.stdout.write(self.style.SUCCESS(f"Artist: {artist.name}"))
