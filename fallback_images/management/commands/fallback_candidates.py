import json

from django.core.management.base import BaseCommand, CommandError

from fallback_images.builder import build_candidates
from fallback_images.request import ImageRequest


class Command(BaseCommand):
    help = "Show the URLs an image falls back through, in the order they're tried"

    def add_arguments(self, parser):
        parser.add_argument("sources", nargs="+", help="Source image paths or URLs")
        parser.add_argument("--width", "-W", type=int, default=0, help="Target width")
        parser.add_argument(
            "--height", "-H", type=int, default=0, help="Target height"
        )
        ext_group = parser.add_mutually_exclusive_group()
        ext_group.add_argument(
            "--ext",
            help="Extension to swap to (defaults to the FALLBACK_IMAGES EXT setting)",
        )
        ext_group.add_argument(
            "--keep-ext",
            action="store_true",
            help="Keep each source's own extension",
        )
        parser.add_argument(
            "--size",
            action="append",
            dest="sizes",
            default=[],
            metavar="WxH[:EXT]",
            help="Add a size variant (can be repeated)",
        )
        parser.add_argument(
            "--format",
            choices=["plain", "json"],
            default="plain",
            help="Output format (default: plain)",
        )

    def handle(self, *args, **options):
        request_options = {
            "w": options["width"],
            "h": options["height"],
            "sizes": options["sizes"],
        }
        if options["keep_ext"]:
            request_options["ext"] = None
        elif options["ext"]:
            request_options["ext"] = options["ext"]

        results = {}
        for source in options["sources"]:
            try:
                request = ImageRequest.from_options(source, **request_options)
                results[source] = build_candidates(request)
            except ValueError as e:
                raise CommandError(str(e))

        if options["format"] == "json":
            self.stdout.write(json.dumps(results, indent=2))
            return
        for source, candidates in results.items():
            self.stdout.write(self.style.MIGRATE_HEADING(source))
            if not candidates:
                self.stdout.write("  (no candidates)")
            for position, url in enumerate(candidates, start=1):
                self.stdout.write(f"  {position}. {url}")
