import click
import math
import sys
from colorama import Fore, Style


def parse_result_file(file):
    # read file without newlines at the end
    with open(file, "r") as f:
        lines = f.read().splitlines()

    # an optional separator hint is written in the first line, e.g. sep=;
    if lines and lines[0].startswith("sep="):
        sep = lines[0].split('=')[1][0]
        lines = lines[1:]
    else:
        sep = ";"

    return sep, [line.split(sep) for line in lines]


def compare_cells(old, new):
    # empty cells are missing values; they only match other empty cells
    if old == "" or new == "":
        return old == new

    # try to parse a float
    try:
        return math.isclose(float(old), float(new))
    except ValueError:
        # if the conversion to float fails, then compare strings
        return old == new


def compute_difference(result_old, result_new, verbose):
    match = True

    # compare them by length; if the two files have different amounts of lines, then the comparison fails
    if len(result_old) != len(result_new):
        print(f"    {Fore.RED}Length mismatch{Style.RESET_ALL}")
        print(f"    Old table has {len(result_old)} lines")
        print(f"    New table has {len(result_new)} lines")
        return False

    if not result_old:
        return True

    # compare the column names
    col_names = result_old[0]
    if result_old[0] != result_new[0]:
        print(f"    {Fore.RED}Header mismatch{Style.RESET_ALL}")
        print(f"    Old: {';'.join(result_old[0])}")
        print(f"    New: {';'.join(result_new[0])}")
        return False

    # compare them line by line
    for l in range(1, len(result_old)):
        line_old = result_old[l]
        line_new = result_new[l]

        if len(line_old) != len(line_new):
            print(f"    {Fore.RED}Column mismatch{Style.RESET_ALL} "
                  f"{Fore.CYAN}Line {l + 1}{Style.RESET_ALL} - "
                  f"old: {len(line_old)} columns - new: {len(line_new)} columns")
            match = False
            continue

        # compare column by column
        for c in range(0, len(line_old)):
            name = col_names[c] if c < len(col_names) else str(c + 1)
            if not compare_cells(line_old[c], line_new[c]):
                print(f"    {Fore.RED}Value mismatch{Style.RESET_ALL}")
                print(f"    {Fore.CYAN}Line {l + 1}, Column {c + 1} ({name}){Style.RESET_ALL} - "
                      f"old: '{line_old[c]}' - new: '{line_new[c]}'")
                match = False
            elif verbose:
                print(f"    {Fore.GREEN}Value match{Style.RESET_ALL}"
                      f"    {Fore.CYAN}Line {l + 1}, Column {c + 1} ({name}){Style.RESET_ALL} - "
                      f"'{line_old[c]}'")

    return match


@click.command()
@click.option("-v", "--verbose", "verbose",
              is_flag=True,
              show_default=True,
              default=False,
              help="Print more output.")
@click.argument("old_table", type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True))
@click.argument("new_table", type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True))
def main(old_table, new_table, verbose):
    """Compares two aggregated metric tables OLD_TABLE and NEW_TABLE."""
    if verbose:
        print(f"  {Fore.CYAN}Reading result files{Style.RESET_ALL}")
    sep_old, result_old = parse_result_file(old_table)
    sep_new, result_new = parse_result_file(new_table)

    if sep_old != sep_new:
        print(f"    {Fore.YELLOW}Separator differs{Style.RESET_ALL}: '{sep_old}' and '{sep_new}'")

    if verbose:
        print(f"  {Fore.CYAN}Comparing result files{Style.RESET_ALL}")
    match = compute_difference(result_old, result_new, verbose)

    if match:
        print(f"  {Fore.GREEN}Success: {Style.RESET_ALL}Results are matching")
    else:
        print(f"  {Fore.RED}Fail: {Style.RESET_ALL}Results are not matching")
        sys.exit(1)


if __name__ == "__main__":
    main()
