import argparse
import json
import logging

from config import YamlConfig, load_settings, save_settings
from dosing_service import DosingService

logger = logging.getLogger(__name__)


def load_history(path: str) -> list:
    """Read session records from a JSON file (a list, or ``{"history": [...]}``)."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        records = []
        for key in ("history", "historyL", "historyR"):
            if isinstance(data.get(key), list):
                records.extend(data[key])
        return records
    return data if isinstance(data, list) else []


def recommend(history_path: str, config_path: str, side: str, tut: float | None, policy: str | None) -> dict:
    service = DosingService(load_settings(YamlConfig(config_path)))
    records = load_history(history_path)
    if side == "both":
        return service.recommend_both(records, tut, tut, policy)
    return service.recommend(records, side, tut, policy)


def plan(
    history_path: str,
    config_path: str,
    side: str,
    tut: float | None = None,
    sets: int | None = None,
    reps: int | None = None,
    rest_reps: float | None = None,
    rest_sets: float | None = None,
    cap_drop: float | None = None,
    policy: str | None = None,
    precise: bool | None = None,
) -> dict:
    service = DosingService(load_settings(YamlConfig(config_path)))
    request = service.default_request(
        target_duration=tut,
        sets=sets,
        reps_per_set=reps,
        rest_between_reps=rest_reps,
        rest_between_sets=rest_sets,
        cap_drop_fraction=cap_drop,
        anchor_policy=policy,
        precise=precise,
    )
    return service.plan(load_history(history_path), side, request)


def curve(config_path: str, side: str) -> dict:
    service = DosingService(load_settings(YamlConfig(config_path)))
    return service.curves(side)


def learn(history_path: str, config_path: str, side: str) -> dict:
    cfg = YamlConfig(config_path)
    service = DosingService(load_settings(cfg))
    records = load_history(history_path)
    sides = ["L", "R"] if side == "both" else [side]
    for s in sides:
        service = DosingService(service.learn_anchors(records, s))
    save_settings(cfg, service.settings)
    logger.info("Saved learned anchors to %s", cfg.path)
    return {
        "L": service.settings.left.anchors.model_dump(),
        "R": service.settings.right.anchors.model_dump(),
    }


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Grip training load dosing")
    parser.add_argument("--config", default=None, help="settings YAML file")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    rec = sub.add_parser("recommend")
    rec.add_argument("--history", required=True)
    rec.add_argument("--side", choices=["L", "R", "both"], default="both")
    rec.add_argument("--tut", type=float, default=None)
    rec.add_argument("--policy", choices=["average", "min", "model", "ratio"], default=None)

    pln = sub.add_parser("plan")
    pln.add_argument("--history", required=True)
    pln.add_argument("--side", choices=["L", "R"], required=True)
    pln.add_argument("--tut", type=float, default=None)
    pln.add_argument("--sets", type=int, default=None)
    pln.add_argument("--reps", type=int, default=None)
    pln.add_argument("--rest-reps", type=float, default=None)
    pln.add_argument("--rest-sets", type=float, default=None)
    pln.add_argument("--cap-drop", type=float, default=None)
    pln.add_argument("--policy", choices=["average", "min", "model", "ratio"], default=None)
    pln.add_argument("--precise", action="store_true", default=None)

    crv = sub.add_parser("curve")
    crv.add_argument("--side", choices=["L", "R"], default="L")

    lrn = sub.add_parser("learn")
    lrn.add_argument("--history", required=True)
    lrn.add_argument("--side", choices=["L", "R", "both"], default="both")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.cmd == "recommend":
        out = recommend(args.history, args.config, args.side, args.tut, args.policy)
    elif args.cmd == "plan":
        out = plan(
            args.history,
            args.config,
            args.side,
            tut=args.tut,
            sets=args.sets,
            reps=args.reps,
            rest_reps=args.rest_reps,
            rest_sets=args.rest_sets,
            cap_drop=args.cap_drop,
            policy=args.policy,
            precise=args.precise,
        )
    elif args.cmd == "curve":
        out = curve(args.config, args.side)
    else:
        out = learn(args.history, args.config, args.side)
    print(json.dumps(out, indent=2))


if __name__ == "__main__":
    main()
