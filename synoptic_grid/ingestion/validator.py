from typing import Any, Dict, Optional, Tuple
from .schema import DailyDocument
from pydantic import ValidationError

class DataValidator:
    def validate(self, record: Dict[str, Any]) -> Tuple[Optional[DailyDocument], str]:
        try:
            return DailyDocument(**record), ""
        except ValidationError as e:
            return None, str(e)
