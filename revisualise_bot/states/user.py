from aiogram.fsm.state import State, StatesGroup

from revisualise_bot.data.constants import ImageRole


class Intake(StatesGroup):
    """Which photo slot the next incoming image fills."""
    child_photo = State()
    adult_photo = State()


INTAKE_STATE_BY_ROLE: dict[ImageRole, State] = {
    ImageRole.CHILD: Intake.child_photo,
    ImageRole.ADULT: Intake.adult_photo,
}
