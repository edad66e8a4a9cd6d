"""
Source listings shown in the code panel, plus the line numbers each kind of
step highlights in every listing.
"""

from typing import Dict, Tuple

from floyd.fd_model import LANGUAGES

ALGORITHM_CODE: Dict[str, str] = {
    "java": """class Solution {
    public int findDuplicate(int[] nums) {
        int slow = 0;
        int fast = 0;
        // Phase 1: find the meeting point
        slow = nums[slow];
        fast = nums[nums[fast]];
        while (slow != fast) {
            slow = nums[slow];
            fast = nums[nums[fast]];
        }
        // Phase 2: find the cycle entry
        int pre1 = 0;
        int pre2 = slow;
        while (pre1 != pre2) {
            pre1 = nums[pre1];
            pre2 = nums[pre2];
        }
        return pre1;
    }
}""",
    "python": """class Solution:
    def findDuplicate(self, nums: List[int]) -> int:
        slow = 0
        fast = 0
        # Phase 1: find the meeting point
        slow = nums[slow]
        fast = nums[nums[fast]]
        while slow != fast:
            slow = nums[slow]
            fast = nums[nums[fast]]
        # Phase 2: find the cycle entry
        pre1 = 0
        pre2 = slow
        while pre1 != pre2:
            pre1 = nums[pre1]
            pre2 = nums[pre2]
        return pre1""",
    "golang": """func findDuplicate(nums []int) int {
    slow := 0
    fast := 0
    // Phase 1: find the meeting point
    slow = nums[slow]
    fast = nums[nums[fast]]
    for slow != fast {
        slow = nums[slow]
        fast = nums[nums[fast]]
    }
    // Phase 2: find the cycle entry
    pre1 := 0
    pre2 := slow
    for pre1 != pre2 {
        pre1 = nums[pre1]
        pre2 = nums[pre2]
    }
    return pre1
}""",
    "javascript": """var findDuplicate = function(nums) {
    let slow = 0;
    let fast = 0;
    // Phase 1: find the meeting point
    slow = nums[slow];
    fast = nums[nums[fast]];
    while (slow !== fast) {
        slow = nums[slow];
        fast = nums[nums[fast]];
    }
    // Phase 2: find the cycle entry
    let pre1 = 0;
    let pre2 = slow;
    while (pre1 !== pre2) {
        pre1 = nums[pre1];
        pre2 = nums[pre2];
    }
    return pre1;
};""",
}

LANGUAGE_LABELS = {
    "java": "Java",
    "python": "Python",
    "golang": "Go",
    "javascript": "JavaScript",
}

# 每类步骤在各语言代码中的高亮行（从 1 开始）
_LINE_TABLE: Dict[str, Dict[str, Tuple[int, ...]]] = {
    "init": {"java": (3, 4), "python": (3, 4), "golang": (2, 3), "javascript": (2, 3)},
    "prime": {"java": (6, 7), "python": (6, 7), "golang": (5, 6), "javascript": (5, 6)},
    "phase1_loop": {
        "java": (8, 9, 10),
        "python": (8, 9, 10),
        "golang": (7, 8, 9),
        "javascript": (7, 8, 9),
    },
    "meeting": {"java": (12, 13), "python": (11, 12), "golang": (11, 12), "javascript": (11, 12)},
    "phase2_start": {"java": (13, 14), "python": (12, 13), "golang": (12, 13), "javascript": (12, 13)},
    "phase2_loop": {
        "java": (15, 16, 17),
        "python": (14, 15, 16),
        "golang": (14, 15, 16),
        "javascript": (14, 15, 16),
    },
    "result": {"java": (19,), "python": (17,), "golang": (18,), "javascript": (18,)},
}

# Line the variable readout sits next to, per step kind and variable.
VARIABLE_LINES: Dict[str, Dict[str, int]] = {
    "init": {"slow": 3, "fast": 4},
    "prime": {"slow": 6, "fast": 7},
    "phase1_loop": {"slow": 9, "fast": 10},
    "meeting": {"slow": 12, "fast": 12},
    "phase2_start": {"pre1": 13, "pre2": 14},
    "phase2_loop": {"pre1": 16, "pre2": 17},
    "result": {"pre1": 19, "result": 19},
}


def code_lines_for(kind: str) -> Dict[str, Tuple[int, ...]]:
    """Fresh language -> lines mapping for one step kind."""
    table = _LINE_TABLE[kind]
    return {language: tuple(table[language]) for language in LANGUAGES}


ALGORITHM_THOUGHT = """## Fast & slow pointers (Floyd's cycle detection)

### Core idea
Read the array as a linked list and use Floyd's cycle detection to find the
entry of the cycle. That entry is the duplicate number.

### Why is it a linked list?
- Indices range over [0, n]
- Values range over [1, n]
- Treat nums[i] as the node that node i points to
- A duplicate value means two nodes point at the same node, so a cycle forms

### Steps

**Phase 1: find the meeting point**
1. fast moves two steps at a time: fast = nums[nums[fast]]
2. slow moves one step at a time: slow = nums[slow]
3. Stop when slow == fast

**Phase 2: find the cycle entry**
1. Reset one pointer to the start, index 0
2. Move both pointers one step at a time
3. Where they meet is the cycle entry, the duplicate number

### Complexity
Time O(n), extra space O(1).

### Why it works
Let a be the distance from the start to the cycle entry, b the distance from
the entry to the meeting point and c the distance from the meeting point back
to the entry. When the pointers meet slow has walked a + b steps and fast has
walked a + b + k(b + c). Since fast walks twice as far, 2(a + b) =
a + b + k(b + c), so a = c + (k - 1)(b + c). Two pointers starting at index 0
and at the meeting point therefore meet exactly at the cycle entry.
"""
