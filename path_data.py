from __future__ import annotations
from typing import List, Tuple

PATH_COMMANDS = 'MmLlHhVvCcSsQqTtAaZz'

PathCommand = Tuple

def _parse_path_numbers(path_str: str, start_pos: int) -> Tuple[List[float], int]:
    numbers = []
    pos = start_pos
    current_num = ""

    while pos < len(path_str):
        char = path_str[pos]

        if char.isalpha() and char not in 'eE':
            break

        if char in ' \t\n\r,':
            if current_num:
                try:
                    numbers.append(float(current_num))
                except ValueError:
                    pass
                current_num = ""
        elif char in '+-' or char.isdigit() or char == '.' or char in 'eE':
            if current_num and char in '+-' and current_num[-1] not in 'eE':
                try:
                    numbers.append(float(current_num))
                except ValueError:
                    pass
                current_num = char
            elif char == '.' and '.' in current_num and not any(e in current_num for e in 'eE'):
                # "0.5.5" is two numbers
                try:
                    numbers.append(float(current_num))
                except ValueError:
                    pass
                current_num = char
            else:
                current_num += char
        else:
            if current_num:
                try:
                    numbers.append(float(current_num))
                except ValueError:
                    pass
                current_num = ""

        pos += 1

    if current_num:
        try:
            numbers.append(float(current_num))
        except ValueError:
            pass

    return numbers, pos

def parse_path_data(path_str: str) -> List[PathCommand]:
    """Parse SVG path data into absolute commands.

    The result only uses ``M``, ``L``, ``C``, ``Q``, ``A`` and ``Z``:
    ``H``/``V`` become lines and the smooth curve forms get their reflected
    control point spelled out. Parsing stops quietly at the first malformed
    segment, keeping everything before it.
    """
    if not path_str:
        return []

    commands = []
    pos = 0
    current_x, current_y = 0.0, 0.0
    start_x, start_y = 0.0, 0.0
    prev_cp_x, prev_cp_y = None, None
    prev_qcp_x, prev_qcp_y = None, None

    path_str = path_str.strip()

    while pos < len(path_str):
        while pos < len(path_str) and path_str[pos] in ' \t\n\r,':
            pos += 1

        if pos >= len(path_str):
            break

        cmd = path_str[pos]
        pos += 1
        if cmd not in PATH_COMMANDS:
            break
        is_relative = cmd.islower()
        cmd_upper = cmd.upper()

        if cmd_upper == 'Z':
            commands.append(('Z',))
            current_x, current_y = start_x, start_y
            prev_cp_x = prev_qcp_x = None
            continue

        numbers, pos = _parse_path_numbers(path_str, pos)

        if cmd_upper not in 'CS':
            prev_cp_x, prev_cp_y = None, None
        if cmd_upper not in 'QT':
            prev_qcp_x, prev_qcp_y = None, None

        if cmd_upper == 'M':
            i = 0
            while i < len(numbers) - 1:
                if is_relative:
                    current_x += numbers[i]
                    current_y += numbers[i + 1]
                else:
                    current_x = numbers[i]
                    current_y = numbers[i + 1]
                if i == 0:
                    start_x, start_y = current_x, current_y
                    commands.append(('M', current_x, current_y))
                else:
                    # extra pairs after a moveto are implicit linetos
                    commands.append(('L', current_x, current_y))
                i += 2

        elif cmd_upper == 'L':
            i = 0
            while i < len(numbers) - 1:
                if is_relative:
                    current_x += numbers[i]
                    current_y += numbers[i + 1]
                else:
                    current_x = numbers[i]
                    current_y = numbers[i + 1]
                commands.append(('L', current_x, current_y))
                i += 2

        elif cmd_upper == 'H':
            for num in numbers:
                if is_relative:
                    current_x += num
                else:
                    current_x = num
                commands.append(('L', current_x, current_y))

        elif cmd_upper == 'V':
            for num in numbers:
                if is_relative:
                    current_y += num
                else:
                    current_y = num
                commands.append(('L', current_x, current_y))

        elif cmd_upper == 'C':
            i = 0
            while i < len(numbers) - 5:
                if is_relative:
                    cp1x = current_x + numbers[i]
                    cp1y = current_y + numbers[i + 1]
                    cp2x = current_x + numbers[i + 2]
                    cp2y = current_y + numbers[i + 3]
                    end_x = current_x + numbers[i + 4]
                    end_y = current_y + numbers[i + 5]
                else:
                    cp1x, cp1y, cp2x, cp2y, end_x, end_y = numbers[i:i + 6]

                commands.append(('C', cp1x, cp1y, cp2x, cp2y, end_x, end_y))
                current_x, current_y = end_x, end_y
                prev_cp_x, prev_cp_y = cp2x, cp2y
                i += 6

        elif cmd_upper == 'S':
            i = 0
            while i < len(numbers) - 3:
                if prev_cp_x is not None:
                    cp1x = 2 * current_x - prev_cp_x
                    cp1y = 2 * current_y - prev_cp_y
                else:
                    cp1x, cp1y = current_x, current_y

                if is_relative:
                    cp2x = current_x + numbers[i]
                    cp2y = current_y + numbers[i + 1]
                    end_x = current_x + numbers[i + 2]
                    end_y = current_y + numbers[i + 3]
                else:
                    cp2x, cp2y, end_x, end_y = numbers[i:i + 4]

                commands.append(('C', cp1x, cp1y, cp2x, cp2y, end_x, end_y))
                current_x, current_y = end_x, end_y
                prev_cp_x, prev_cp_y = cp2x, cp2y
                i += 4

        elif cmd_upper == 'Q':
            i = 0
            while i < len(numbers) - 3:
                if is_relative:
                    cpx = current_x + numbers[i]
                    cpy = current_y + numbers[i + 1]
                    end_x = current_x + numbers[i + 2]
                    end_y = current_y + numbers[i + 3]
                else:
                    cpx, cpy, end_x, end_y = numbers[i:i + 4]

                commands.append(('Q', cpx, cpy, end_x, end_y))
                current_x, current_y = end_x, end_y
                prev_qcp_x, prev_qcp_y = cpx, cpy
                i += 4

        elif cmd_upper == 'T':
            i = 0
            while i < len(numbers) - 1:
                if prev_qcp_x is not None:
                    cpx = 2 * current_x - prev_qcp_x
                    cpy = 2 * current_y - prev_qcp_y
                else:
                    cpx, cpy = current_x, current_y

                if is_relative:
                    end_x = current_x + numbers[i]
                    end_y = current_y + numbers[i + 1]
                else:
                    end_x = numbers[i]
                    end_y = numbers[i + 1]

                commands.append(('Q', cpx, cpy, end_x, end_y))
                current_x, current_y = end_x, end_y
                prev_qcp_x, prev_qcp_y = cpx, cpy
                i += 2

        elif cmd_upper == 'A':
            i = 0
            while i < len(numbers) - 6:
                rx = abs(numbers[i])
                ry = abs(numbers[i + 1])
                rotation = numbers[i + 2]
                large_arc = numbers[i + 3] != 0
                sweep = numbers[i + 4] != 0

                if is_relative:
                    end_x = current_x + numbers[i + 5]
                    end_y = current_y + numbers[i + 6]
                else:
                    end_x = numbers[i + 5]
                    end_y = numbers[i + 6]

                commands.append(('A', rx, ry, rotation, large_arc, sweep, end_x, end_y))
                current_x, current_y = end_x, end_y
                i += 7

    return commands
