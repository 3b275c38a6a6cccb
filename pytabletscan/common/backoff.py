################################################################################
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
# limitations under the License.
################################################################################
import logging
import random
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RandomBackoff:
    """
    Randomized pause between metadata lookups that have not converged yet.

    Every pause lasts ``min_millis + randrange(jitter_millis)`` milliseconds,
    i.e. [100, 200) ms with the defaults. The random generator and the sleep
    function are injectable so retry timing is deterministic under test.
    """

    def __init__(self,
                 min_millis: int = 100,
                 jitter_millis: int = 100,
                 rng: Optional[random.Random] = None,
                 sleep: Callable[[float], None] = time.sleep):
        if min_millis < 0 or jitter_millis < 0:
            raise ValueError("Backoff durations must not be negative")
        self.min_millis = min_millis
        self.jitter_millis = jitter_millis
        self.rng = rng if rng is not None else random.Random()
        self.sleep = sleep
        self.pauses = 0

    def next_delay_millis(self) -> int:
        jitter = self.rng.randrange(self.jitter_millis) if self.jitter_millis > 0 else 0
        return self.min_millis + jitter

    def pause(self) -> int:
        delay = self.next_delay_millis()
        self.pauses += 1
        logger.debug("Backing off for %d ms (pause %d)", delay, self.pauses)
        self.sleep(delay / 1000.0)
        return delay
