from roomreel.utils.schemas import ChallengeCreate, ChallengeStep

ROOM_TOUR_ID = "room-tour"
DAY_IN_LIFE_ID = "day-in-life"

DEFAULT_CHALLENGES: dict[str, ChallengeCreate] = {
    ROOM_TOUR_ID: ChallengeCreate(
        name="Show Your Room in 5 Clips",
        description="Create awesome videos about your student housing experience and win amazing rewards!",
        steps=[
            ChallengeStep(id=1, title="Show us your bed area", description="Pan around your sleeping space", emoji="🛏️", duration=5),
            ChallengeStep(id=2, title="Your study/work space", description="Show your desk setup", emoji="📚", duration=5),
            ChallengeStep(id=3, title="Kitchen/food area", description="Open the fridge, show cooking space", emoji="🍕", duration=6),
            ChallengeStep(id=4, title="Bathroom facilities", description="Quick tour of your bathroom", emoji="🚿", duration=4),
            ChallengeStep(id=5, title="Your favorite spot", description="Show us where you love to hang out", emoji="🌟", duration=5),
        ],
        points_per_step=25,
    ),
    DAY_IN_LIFE_ID: ChallengeCreate(
        name="Day in Life Challenge",
        description="Document a typical day in your student life with 5 engaging clips!",
        steps=[
            ChallengeStep(id=1, title="Morning routine", description="Show us how you start your day", emoji="🌅", duration=6),
            ChallengeStep(id=2, title="Study session", description="Capture yourself studying or in class", emoji="📖", duration=5),
            ChallengeStep(id=3, title="Meal time", description="Show us what and where you eat", emoji="🍽️", duration=5),
            ChallengeStep(id=4, title="Social time", description="Hanging out with friends or activities", emoji="👥", duration=6),
            ChallengeStep(id=5, title="Evening wind-down", description="How you relax and end your day", emoji="🌙", duration=5),
        ],
        points_per_step=25,
    ),
}
