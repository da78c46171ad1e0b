import logging
from typing import List, Tuple

from sumtype import SumType, _, always, exhaustive


class Download(SumType):
    Downloading: Tuple[int]
    Completed: Tuple[()]
    Failed: Tuple[str]


progress = exhaustive(Download, {
    'Downloading': lambda pct: pct,
    'Completed': always(100),
    _: always(0)
})

describe = exhaustive(Download, {
    'Downloading': lambda pct: f'{pct}% done',
    'Completed': always('done'),
    'Failed': lambda reason: f'failed: {reason}'
})


def report(downloads: List[Download]) -> None:
    for download in downloads:
        print(f'{download!r:40} {download.match(progress):>3}%  '
              f'{download.match(describe)}')


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    report([
        Download.Downloading(42),
        Download.Completed(),
        Download.Failed('Connection reset.')
    ])
