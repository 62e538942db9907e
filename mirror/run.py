# SPDX-License-Identifier: GPL-3.0-or-later

from concurrent import futures
from typing import Iterable, List

from mirror import Action, Clone, RepositoryRef, Report, Result
from mirror import guard
from mirror.errors import RepositoryError
from mirror.git import Git
from mirror.plan import plan
from mirror.store import Store


def _failed(name: str, action: str, e: RepositoryError) -> Result:
    print(f"ERROR: {action.capitalize()} of {name} failed ({type(e).__name__}): {e.cause}")
    return Result(name, action, e)


def _reconcile(action: Action, operator: Git) -> Result:
    if isinstance(action, Clone):
        name = action.ref.name
        try:
            entry = operator.clone(action.ref)
            guard.ensure_protected(entry)
        except RepositoryError as e:
            return _failed(name, 'clone', e)
        return Result(name, 'clone')

    entry = action.entry
    # Protect first: the mirror must reject pushes even if fetching fails
    try:
        guard.ensure_protected(entry)
        operator.update(entry)
    except RepositoryError as e:
        return _failed(entry.name, 'update', e)
    return Result(entry.name, 'update')


def run(refs: Iterable[RepositoryRef], store: Store, operator: Git, jobs: int = 1) -> Report:
    """
    Bring the mirrors in ``store`` in line with ``refs``.

    Failures of single repositories are collected in the returned report.
    Only errors that prevent doing anything at all (e.g. an unreadable
    repository directory) are raised.
    """
    refs = list(refs)
    local = store.list()
    p = plan(refs, local, store)

    results: List[Result] = [Result(e.name, 'skip', e) for e in p.invalid]
    for e in p.invalid:
        print(f"ERROR: Skipping repository {e.name}: {e.cause}")

    if jobs <= 1:
        for action in p.actions:
            results.append(_reconcile(action, operator))
    else:
        with futures.ThreadPoolExecutor(max_workers=jobs) as pool:
            pending = [pool.submit(_reconcile, action, operator) for action in p.actions]
            try:
                results.extend(f.result() for f in pending)
            except KeyboardInterrupt:
                for f in pending:
                    f.cancel()
                raise

    # Report in the order the repositories were listed
    order = {r.name: i for i, r in reversed(list(enumerate(refs)))}
    results.sort(key=lambda r: order.get(r.name, len(order)))
    return Report(results)


def print_report(report: Report):
    print("Summary:")
    for r in report.results:
        if r.ok:
            print(f"  {r.name}: ok ({r.action})")
        else:
            print(f"  {r.name}: {r.kind}: {r.error.cause}")

    failed = len(report.failed)
    print(f"{len(report.results) - failed} repositories reconciled, {failed} failed")
