"""
Scheduler entry point.

Launches every job suspended, then runs the SchedulerEngine until all of
them have exited. One subcommand per policy:

    procsched fifo JOB [JOB ...]
    procsched sjf [--bursts 5,2,8] JOB [JOB ...]
    procsched rr QUANTUM_MS JOB [JOB ...]
    procsched mlfq [--tiers N] QUANTUM_MS JOB [JOB ...]

To run without installing the console script:
    python -m worker.main rr 50 ./p1 ./p2

Exit codes:
    0  every job ran to completion
    1  fatal scheduling error, or no job could be launched
    2  usage error (argparse), nothing is launched
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from config.settings import settings
from jobs.spec import JobSpec, parse_burst_from_name
from models.enums import SchedulingPolicy
from models.report import ScheduleReport
from scheduler.base import SchedulerError
from scheduler.engine import SchedulerEngine
from scheduler.monitor import CompletionMonitor
from scheduler.registry import create_ready_queue
from worker.launcher import JobLauncher
from worker.process import ProcessController

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{raw}'")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def _burst_list(raw: str) -> list[int]:
    try:
        values = [int(item.strip()) for item in raw.split(",") if item.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"bursts must be comma-separated integers, got '{raw}'")
    if any(v < 0 for v in values):
        raise argparse.ArgumentTypeError("burst lengths cannot be negative")
    return values


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procsched",
        description="Schedule child processes with FIFO, SJF, Round Robin or MLFQ.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    policies = parser.add_subparsers(dest="policy", required=True, metavar="POLICY")

    fifo = policies.add_parser(SchedulingPolicy.FIFO.value, help="first in, first out")
    fifo.add_argument("jobs", nargs="+", metavar="JOB")

    sjf = policies.add_parser(SchedulingPolicy.SJF.value, help="shortest job first")
    sjf.add_argument(
        "--bursts",
        type=_burst_list,
        help="comma-separated burst lengths, one per job; "
             "default: decoded from each program name (p5 → 5)",
    )
    sjf.add_argument("jobs", nargs="+", metavar="JOB")

    rr = policies.add_parser(SchedulingPolicy.ROUND_ROBIN.value, help="round robin")
    rr.add_argument("quantum", type=_positive_int, metavar="QUANTUM_MS")
    rr.add_argument("jobs", nargs="+", metavar="JOB")

    mlfq = policies.add_parser(SchedulingPolicy.MLFQ.value, help="multi-level feedback queue")
    mlfq.add_argument("--tiers", type=_positive_int, default=settings.MLFQ_TIERS)
    mlfq.add_argument("quantum", type=_positive_int, metavar="QUANTUM_MS")
    mlfq.add_argument("jobs", nargs="+", metavar="JOB")

    return parser


def build_specs(parser: argparse.ArgumentParser, args: argparse.Namespace) -> list[JobSpec]:
    """Turn the positional job names into validated JobSpecs (usage errors exit 2)."""
    if args.policy != SchedulingPolicy.SJF.value:
        return [JobSpec.from_program(program) for program in args.jobs]

    if args.bursts is not None:
        if len(args.bursts) != len(args.jobs):
            parser.error(
                f"--bursts has {len(args.bursts)} values for {len(args.jobs)} jobs"
            )
        bursts = args.bursts
    else:
        try:
            bursts = [parse_burst_from_name(program) for program in args.jobs]
        except ValueError as e:
            parser.error(f"{e}; pass --bursts explicitly")
    return [
        JobSpec.from_program(program, burst_length=burst)
        for program, burst in zip(args.jobs, bursts)
    ]


def print_report(report: ScheduleReport, out=None) -> None:
    out = out or sys.stdout
    header_fmt = "{:>5} {:>8} {:<20} {:>4} {:<10}"
    print(f"\nPolicy {report.policy.value}: {report.cycles} dispatch cycles", file=out)
    print(header_fmt.format("Cycle", "PID", "Job", "Tier", "Outcome"), file=out)
    for r in report.records:
        print(header_fmt.format(r.cycle, r.pid, r.name[:20], r.tier, r.outcome.value), file=out)
    print(f"Completion order: {', '.join(report.completion_order)}", file=out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.getLogger().setLevel(args.log_level)

    policy = SchedulingPolicy(args.policy)
    specs = build_specs(parser, args)
    quantum = args.quantum / 1000.0 if hasattr(args, "quantum") else None

    ready_queue = create_ready_queue(policy, tiers=getattr(args, "tiers", None))
    controller = ProcessController()
    monitor = CompletionMonitor(capacity=len(specs))
    launcher = JobLauncher(controller, monitor)

    try:
        jobs = launcher.launch(specs, ready_queue)
        if not jobs:
            logger.error("No job could be launched, nothing to schedule")
            return EXIT_FATAL
        engine = SchedulerEngine(ready_queue, controller, monitor, quantum=quantum)
        report = engine.run()
    except SchedulerError as e:
        logger.critical(f"Fatal scheduling error: {e}")
        controller.terminate_all()
        return EXIT_FATAL
    except BaseException:
        # Ctrl+C or a crash: never leave stopped children behind
        controller.terminate_all()
        raise

    print_report(report)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
