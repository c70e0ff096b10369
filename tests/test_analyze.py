from analyze import analyze_maze, connect, find_leader
from maze import Coord, Link, add_link, create_maze


def _as_sets(analysis):
    groups = {frozenset(group) for group in analysis.groups}
    return groups, set(analysis.boundaries)


def test_unlinked_cells_are_singleton_groups():
    maze = create_maze(3, 1)
    analysis = analyze_maze(maze)

    assert analysis.groups == [[Coord(0, 0)], [Coord(1, 0)], [Coord(2, 0)]]
    assert analysis.boundaries == [
        Link(Coord(0, 0), Coord(1, 0)),
        Link(Coord(1, 0), Coord(2, 0)),
    ]
    assert not analysis.connected


def test_groups_and_boundaries_follow_cell_order():
    maze = create_maze(2, 2)
    add_link(maze, Coord(0, 0), Coord(1, 0))
    analysis = analyze_maze(maze)

    assert analysis.groups == [[Coord(0, 0), Coord(1, 0)], [Coord(0, 1)], [Coord(1, 1)]]
    assert analysis.boundaries == [
        Link(Coord(0, 0), Coord(0, 1)),
        Link(Coord(1, 0), Coord(1, 1)),
        Link(Coord(0, 1), Coord(1, 1)),
    ]


def test_fully_linked_maze_has_no_boundaries():
    maze = create_maze(2, 2)
    add_link(maze, Coord(0, 0), Coord(1, 0))
    add_link(maze, Coord(1, 0), Coord(1, 1))
    add_link(maze, Coord(1, 1), Coord(0, 1))
    analysis = analyze_maze(maze)

    assert analysis.connected
    assert len(analysis.groups) == 1
    assert analysis.boundaries == []


def test_analysis_is_pure():
    maze = create_maze(4, 4)
    add_link(maze, Coord(0, 0), Coord(0, 1))
    add_link(maze, Coord(2, 2), Coord(3, 2))
    add_link(maze, Coord(3, 2), Coord(3, 3))
    before = maze.to_record()

    first = analyze_maze(maze)
    second = analyze_maze(maze)

    assert _as_sets(first) == _as_sets(second)
    assert first == second
    assert maze.to_record() == before


def test_links_to_missing_cells_are_ignored():
    maze = create_maze(2, 1)
    add_link(maze, Coord(0, 0), Coord(0, 5))
    add_link(maze, Coord(0, 5), Coord(1, 0))
    analysis = analyze_maze(maze)

    assert len(analysis.groups) == 2
    assert analysis.boundaries == [Link(Coord(0, 0), Coord(1, 0))]


def test_connect_makes_second_root_the_leader():
    a, b, c = Coord(0, 0), Coord(1, 0), Coord(2, 0)
    leader = {}
    connect(leader, a, b)
    assert find_leader(leader, a) == b
    connect(leader, b, c)
    assert find_leader(leader, a) == c
    assert find_leader(leader, b) == c


def test_find_leader_compresses_the_chain():
    cells = [Coord(x, 0) for x in range(6)]
    leader = {cells[i]: cells[i + 1] for i in range(5)}

    assert find_leader(leader, cells[0]) == cells[5]
    assert all(leader[cell] == cells[5] for cell in cells[:5])


def test_find_leader_of_untouched_cell_is_itself():
    assert find_leader({}, Coord(3, 3)) == Coord(3, 3)


def test_long_chain_does_not_recurse():
    cells = [Coord(x, 0) for x in range(5000)]
    leader = {cells[i]: cells[i + 1] for i in range(len(cells) - 1)}
    assert find_leader(leader, cells[0]) == cells[-1]


def test_analysis_record_uses_text_form():
    maze = create_maze(2, 1)
    assert analyze_maze(maze).to_record() == {
        "groups": [["0,0"], ["1,0"]],
        "boundaries": ["0,0-1,0"],
    }
