# Small script to check that the example scripts still produce the same output after interpreter changes

from __future__ import annotations

from typing import Iterable, List, Any, Tuple, TypedDict

import pathlib
import subprocess
import sys
import json

from termcolor import colored

cwd = pathlib.Path(__file__).resolve().parent
scripts = cwd / 'tests' / 'scripts'

def paint(text: str, color: str) -> str:
    return colored(text, color, attrs=['bold'], no_color=not sys.stdout.isatty())

def run(file: pathlib.Path, args: Iterable[Any]) -> Tuple[int, str, str]:
    # Relative path so diagnostics in the expected output do not depend on the checkout location.
    new = [sys.executable, '-m', 'minijs', str(file.relative_to(cwd).as_posix())]
    new.extend([str(arg) for arg in args])

    process = subprocess.run(new, stdout=subprocess.PIPE, stderr=subprocess.PIPE, cwd=cwd)
    return process.returncode, process.stdout.decode(), process.stderr.decode()

class TestResult(TypedDict):
    returncode: int
    args: List[str]
    stdout: str
    stderr: str

class Test:
    def __init__(self, file: pathlib.Path) -> None:
        self.file = file

    def run(self) -> bool:
        result = self.parse_output_file()
        returncode, stdout, stderr = run(self.file, result['args'])

        if returncode != result['returncode']:
            print(f'- {paint(f"Test {self.file.name} failed with return code {returncode}.", "red")}')
            print('    Expected return code:', result['returncode'])

            return False

        if stdout != result['stdout']:
            print(f'- {paint(f"Test {self.file.name} failed.", "red")}')

            print('    Expected stdout:'); print(result['stdout'])
            print('    Actual stdout:'); print(stdout)

            return False

        if stderr != result['stderr']:
            print(f'- {paint(f"Test {self.file.name} failed.", "red")}')

            print('    Expected stderr:'); print(result['stderr'])
            print('    Actual stderr:'); print(stderr)

            return False

        return True

    def update(self, *args: str) -> None:
        returncode, stdout, stderr = run(self.file, args)
        self.update_output_file(returncode, list(args), stdout, stderr)

    def has_output_file(self) -> bool:
        return self.output_file.exists()

    @property
    def output_file(self) -> pathlib.Path:
        return self.file.with_suffix('.output.json')

    def parse_output_file(self) -> TestResult:
        with open(self.output_file, 'r') as f:
            return json.load(f)

    def update_output_file(
        self, returncode: int, args: List[str], stdout: str, stderr: str
    ) -> None:
        with open(self.output_file, 'w') as f:
            json.dump({
                'returncode': returncode,
                'args': args,
                'stdout': stdout,
                'stderr': stderr
            }, f, indent=4)

def main() -> None:
    do_update = len(sys.argv) > 1 and sys.argv[1] == 'update'

    i = 0
    failed = 0
    for file in sorted(scripts.iterdir()):
        if file.suffix != '.js':
            continue

        test = Test(file)
        print(f"- {paint(f'Running test {i} ({file.name!r})', 'white')}")
        i += 1

        if not test.has_output_file() or do_update:
            test.update()
            print('Updated output file.\n')

            continue

        if not test.run():
            failed += 1
            continue

        print(f'- {paint("Passed.", "green")}\n')

    if failed:
        print(f'\n{failed} of {i} tests failed.')
        sys.exit(1)

    action = 'updated' if do_update else 'ran'
    print(f'\nSuccessfully {action} {i} tests.')

if __name__ == '__main__':
    main()
