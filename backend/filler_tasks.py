# Default tasks appended when a generated project has no task in a category.
# Two per category, each title starting with a distinct word so the first-word
# duplicate check only trips on model-generated titles. A skipped filler is not
# replaced.
from models import Category

FILLERS_PER_CATEGORY = 2

# Pushes each category's fillers later, following the Design -> Audio workflow
FILLER_DEADLINE_OFFSET_DAYS = {
    Category.DESIGN: 0,
    Category.ART: 7,
    Category.CODE: 14,
    Category.AUDIO: 21,
}

FILLER_TASKS = {
    Category.DESIGN: [
        {
            "title": "Core Gameplay Loop Document",
            "difficulty": 3,
            "importance": 5,
            "notes": "Describe what the player does minute to minute and why it is fun.",
            "subtasks": [
                {"title": "List core mechanics", "difficulty": 2, "importance": 5,
                 "notes": "Keep it to the three or four verbs the player uses most."},
                {"title": "Define win and lose conditions", "difficulty": 2, "importance": 4,
                 "notes": "State how a session ends."},
            ],
        },
        {
            "title": "Level Layout Sketches",
            "difficulty": 3,
            "importance": 4,
            "notes": "Rough paper or whiteboard layouts for the first levels.",
            "subtasks": [
                {"title": "Sketch tutorial level", "difficulty": 2, "importance": 4,
                 "notes": "Introduce one mechanic at a time."},
                {"title": "Plan difficulty curve", "difficulty": 3, "importance": 3,
                 "notes": "Note where new challenges appear."},
            ],
        },
    ],
    Category.ART: [
        {
            "title": "Character Sprite Sheets",
            "difficulty": 4,
            "importance": 4,
            "notes": "Main character art with idle, run and jump frames.",
            "subtasks": [
                {"title": "Draw concept sketches", "difficulty": 2, "importance": 4,
                 "notes": "Explore silhouettes before committing."},
                {"title": "Animate core actions", "difficulty": 4, "importance": 4,
                 "notes": "Start with idle and walk cycles."},
            ],
        },
        {
            "title": "Environment Tileset",
            "difficulty": 3,
            "importance": 4,
            "notes": "Reusable tiles for the first world.",
            "subtasks": [
                {"title": "Pick color palette", "difficulty": 1, "importance": 3,
                 "notes": "Limit the palette for a consistent look."},
                {"title": "Draw ground and wall tiles", "difficulty": 3, "importance": 4,
                 "notes": "Make sure edges tile seamlessly."},
            ],
        },
    ],
    Category.CODE: [
        {
            "title": "Movement Controller",
            "difficulty": 3,
            "importance": 5,
            "notes": "Responsive player movement with collision.",
            "subtasks": [
                {"title": "Implement basic movement", "difficulty": 2, "importance": 5,
                 "notes": "Walk, run and jump."},
                {"title": "Tune movement feel", "difficulty": 3, "importance": 4,
                 "notes": "Adjust acceleration and gravity until it feels right."},
            ],
        },
        {
            "title": "Save System",
            "difficulty": 3,
            "importance": 3,
            "notes": "Persist player progress between sessions.",
            "subtasks": [
                {"title": "Define save data format", "difficulty": 2, "importance": 3,
                 "notes": "Store only what is needed to resume."},
                {"title": "Implement save and load", "difficulty": 3, "importance": 3,
                 "notes": "Handle a missing or corrupt save file."},
            ],
        },
    ],
    Category.AUDIO: [
        {
            "title": "Background Music Tracks",
            "difficulty": 4,
            "importance": 3,
            "notes": "Looping music for menus and gameplay.",
            "subtasks": [
                {"title": "Compose main theme", "difficulty": 4, "importance": 3,
                 "notes": "Set the mood of the game."},
                {"title": "Create gameplay loop track", "difficulty": 3, "importance": 3,
                 "notes": "Make sure it loops without a gap."},
            ],
        },
        {
            "title": "Sound Effects Pack",
            "difficulty": 3,
            "importance": 4,
            "notes": "Feedback sounds for player actions.",
            "subtasks": [
                {"title": "Record jump and land sounds", "difficulty": 2, "importance": 4,
                 "notes": "Short and punchy."},
                {"title": "Add UI click sounds", "difficulty": 1, "importance": 2,
                 "notes": "Keep them subtle."},
            ],
        },
    ],
}
