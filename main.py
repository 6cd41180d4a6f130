import argparse
import json
import logging
import os

from gem_bid_filter.controller import BidFilterController
from gem_bid_filter.dates import parse_gem_date
from gem_bid_filter.parser import parse_html
from gem_bid_filter.report import render_table
from gem_bid_filter.state import FilterSession, SettingsStore
from gem_bid_filter.watcher import DocumentWatcher
from gem_bid_filter.config import SETTINGS_FILE

ACTIONS = ("extract", "today", "week", "range", "sort", "reset")


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Filter and sort bids on a saved GeM bid listing page")
    parser.add_argument("page", help="Saved bid listing HTML file")
    parser.add_argument("--action", choices=ACTIONS, default="extract")
    parser.add_argument("--from", dest="from_date", help="Range start, DD-MM-YYYY")
    parser.add_argument("--to", dest="to_date", help="Range end, DD-MM-YYYY")
    parser.add_argument("--output", help="Write the re-ordered / marked page here")
    parser.add_argument("--settings", default=SETTINGS_FILE, help="Settings JSON file")
    parser.add_argument("--watch", action="store_true", help="Re-apply the action whenever the page file changes")
    parser.add_argument("--json", action="store_true", help="Print bids as JSON instead of a table")
    parser.add_argument("--verbose", action="store_true")
    return parser


def _range_bound(parser, value):
    if not value:
        return None
    parsed = parse_gem_date(value)
    if parsed is None:
        parser.error(f"invalid date {value!r}, expected DD-MM-YYYY")
    return parsed.date()


def check_args(parser, args):
    # The watched page is never an output target
    if args.watch and args.output and os.path.realpath(args.output) == os.path.realpath(args.page):
        parser.error("--output must differ from the page when --watch is set")


def read_page(path):
    with open(path, 'r', encoding='utf-8') as f:
        return parse_html(f.read())


def run_action(controller, action, from_date=None, to_date=None):
    if action == "today":
        return controller.show_todays_bids()
    if action == "week":
        return controller.show_this_week_bids()
    if action == "range":
        return controller.show_date_range_bids(from_date, to_date)
    if action == "sort":
        controller.sort_by_newest()
    elif action == "reset":
        controller.reset()
    else:
        controller.apply_settings()
    return controller.extract_all()


def write_page(controller, path):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(str(controller.soup))


def main():
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args()
    check_args(arg_parser, args)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger = logging.getLogger("Main")
    logger.info(f"Starting GeM Bid Filter on {args.page}")

    from_date = _range_bound(arg_parser, args.from_date)
    to_date = _range_bound(arg_parser, args.to_date)

    session = FilterSession(settings=SettingsStore(args.settings).load())
    controller = BidFilterController(session=session)

    def show(bids):
        if args.json:
            print(json.dumps([bid.to_dict() for bid in bids], ensure_ascii=False, indent=2))
        else:
            print(render_table(bids, controller.today))
        print(f"[{controller.status.level}] {controller.status.message}")
        if args.output:
            write_page(controller, args.output)
            logger.info(f"Wrote page to {args.output}")

    def on_change():
        controller.load_document(read_page(args.page))
        controller.refresh()
        show(controller.extract_all())

    try:
        controller.load_document(read_page(args.page))
        show(run_action(controller, args.action, from_date, to_date))
        if args.watch:
            DocumentWatcher(args.page, on_change).run()
    except KeyboardInterrupt:
        logger.info("Stopped.")
    except Exception as e:
        logger.error(f"Bid filter failed: {e}", exc_info=True)


if __name__ == "__main__":
    main()
