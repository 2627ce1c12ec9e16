# run_experiments.py
import os, json, argparse, logging
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from antsystem import TSPInstance, ACOConfig, AntSystem, AntSystemError
from antsystem.experiments import run_repeated_trials, run_parameter_sweep
from antsystem.log import get_logger
from antsystem.report import report_result


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def plot_scatter(details, save_path):
    lengths = [L for (L, t, tour) in details]
    plt.figure()
    x = np.random.normal(loc=1, scale=0.03, size=len(lengths))
    plt.plot(x, lengths, "o")
    plt.xticks([1], ["AS"])
    plt.ylabel("Best tour length")
    plt.title("Best lengths across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_convergence(history, save_path, title="AS convergence"):
    plt.figure()
    plt.plot(range(1, len(history) + 1), history)
    plt.xlabel("Iteration")
    plt.ylabel("Best-so-far tour length")
    plt.title(title)
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def load_instance(args):
    if args.file:
        return TSPInstance.from_file(args.file, n_cities=args.n_cities)
    return TSPInstance.random_euclidean(n=args.n, seed=args.inst_seed, square_size=args.square, name=f"demo{args.n}")


def build_parser():
    ap = argparse.ArgumentParser(description="Ant System for the travelling salesman problem")
    src = ap.add_argument_group("instance")
    src.add_argument("--file", default=None, help="city file, one '<id> <x> <y>' line per city")
    src.add_argument("--n-cities", type=int, default=None, help="read only the first N cities of --file")
    src.add_argument("--n", type=int, default=50, help="number of random cities when no --file is given")
    src.add_argument("--square", type=int, default=100)
    src.add_argument("--inst-seed", type=int, default=123)

    aco = ap.add_argument_group("ant system")
    aco.add_argument("--ants", type=int, default=50)
    aco.add_argument("--iters", type=int, default=200)
    aco.add_argument("--alpha", type=float, default=1.0)
    aco.add_argument("--beta", type=float, default=3.0)
    aco.add_argument("--rho", type=float, default=0.5)
    aco.add_argument("--tau0", type=float, default=0.1)
    aco.add_argument("--seed", type=int, default=None)

    out = ap.add_argument_group("experiments")
    out.add_argument("--runs", type=int, default=1, help="repeated trials; more than 1 writes a summary CSV")
    out.add_argument("--sweep", action="store_true", help="grid over alpha, beta and rho")
    out.add_argument("--outdir", default=os.path.dirname(os.path.abspath(__file__)))
    out.add_argument("--plot", action="store_true", help="save convergence / distribution plots")
    out.add_argument("--log-file", default=None)
    out.add_argument("--verbose", action="store_true")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    logger = get_logger("antsystem", level=logging.DEBUG if args.verbose else logging.INFO, logfile=args.log_file)

    try:
        inst = load_instance(args)
        cfg = ACOConfig(alpha=args.alpha, beta=args.beta, rho=args.rho, tau0=args.tau0,
                        n_ants=args.ants, n_iterations=args.iters, seed=args.seed).validate()

        if args.runs <= 1:
            solver = AntSystem(inst.distance_matrix(), cfg)
            res = solver.run()
            report_result(res, logger)
            if args.plot:
                conv_png = os.path.join(args.outdir, f"convergence_{inst.name}.png")
                plot_convergence(res.history_best_lengths, conv_png)
                logger.info("Saved %s", conv_png)
        else:
            stats, details = run_repeated_trials(inst, cfg, n_runs=args.runs,
                                                 base_seed=args.seed if args.seed is not None else 42)
            logger.info("AS %s", json.dumps(stats, indent=2))
            df_details = pd.DataFrame.from_records(
                [{"run": r, "best_length": L, "time_sec": t, "tour": " ".join(map(str, tour))}
                 for r, (L, t, tour) in enumerate(details)])
            details_csv = ensure(os.path.join(args.outdir, "results_runs.csv"))
            df_details.to_csv(details_csv, index=False)
            summary_csv = ensure(os.path.join(args.outdir, "results_summary.csv"))
            pd.DataFrame.from_records([{"algo": "AS", "instance": inst.name, **stats}]).to_csv(summary_csv, index=False)
            logger.info("Saved %s and %s", details_csv, summary_csv)
            if args.plot:
                plot_scatter(details, os.path.join(args.outdir, "results_distribution.png"))

        if args.sweep:
            grid = {"alpha": [0.5, 1.0, 1.5], "beta": [2.0, 3.0, 4.0], "rho": [0.3, 0.5]}
            rows = run_parameter_sweep(inst, grid, base_cfg=cfg, n_runs=3, base_seed=500,
                                       csv_path=ensure(os.path.join(args.outdir, "as_grid.csv")))
            logger.info("Grid search evaluated: %d", len(rows))
    except AntSystemError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
