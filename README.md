# obliterator

A small top-down survival shooter built on `pygame`. You stand in the
middle of an endless field while bats, crabs and slimes close in. Your
character fires at the nearest living enemy on its own; you only move.
Each kill gives experience, and each level-up heals you and offers three
boosters to choose from.

## Installing

```
pip install .
```

This pulls in `pygame`, which the game uses for its window, drawing and
input.

## Playing

```
obliterator
```

The command runs `obliterator.game.main`, which opens an 800×600 window
titled "The great Obliterator" and plays until the window is closed.

Textures, animations and the font are read from a `Resourses` directory
one level above the working directory (`../Resourses/Animations`,
`../Resourses/Textures`, `../Resourses/Textures/BoosterCards`). They are
not shipped with the package. When an image is missing the game still
runs, but that sprite is drawn blank; a missing booster card prints
"Failed to load texture" to standard error; a missing font falls back to
pygame's default font.

Controls:

- **W A S D** – move
- **Left / Right** and **Enter** – pick a booster after a level-up
- **`** (backtick) – open or close the developer console
- **Enter** after a game over – start a new run (not while the console is open)

Time slows down smoothly while the console or the booster menu is open and
after you die, and speeds back up once they are closed. The time scale
follows `obliterator.game.time_scale_for`, `10 ln(10x) / 46 + 0.5` for a
domain `x` between 0.01 and 1.

The screen shows a health bar, an experience bar with the current level,
and the in-game time as `MM:SS` (`obliterator.hud.format_time`).

## Enemies

| Enemy | HP  | Speed | Damage | Attacks/s | XP  | Spawn cost |
|-------|-----|-------|--------|-----------|-----|------------|
| Bat   | 70  | 80    | 25     | 1.2       | 20  | 1          |
| Crab  | 300 | 100   | 60     | 1.0       | 50  | 4          |
| Slime | 700 | 110   | 70     | 0.8       | 150 | 12         |

All three attack from 40 units away. Spawn points build up over time
(0.7 per second at first) and are spent on the next enemy, which appears
400–500 units from the player. Crabs can be chosen from level 3, slimes
from level 6, and the rate at which spawn points build up grows by 20 %
each level. The first level-up needs 100 experience; each later one needs
`200 × level` more than the one before.

## Boosters

Boosters are drawn at random, weighted by rarity (5 is common, 1 is rare),
three distinct ones at a time: *Fearless bastard*, *Hit the gym* (5);
*Glass cannon*, *Limpy sniper*, *Can't catch me!* (4);
*My teeth are SHARK*, *Son of a gun*, *The Edema Ruh*, *SHOT!gun* (2);
*My dadies rapiers*, *Requiescat in pace*, *Trra-ta-ta-ta-ta!!!* (1).
Each changes the player's hit points, damage, speed, bullet range and
velocity, critical hits, piercing or shooting pattern.

## Console

The console takes one command per line: a name, then an argument after
the first space. A leading number is read from the argument and anything
after it is ignored; `setSpeed` takes an integer.

```
setSpeed 200
setMaxHP 500
setHP 500
setAttackSpeed 2
setDamage 50
setCriticalHitChance 0.5
setCriticalDamageCoefficient 2
setBulletPenetration true
setBulletVelocity 300
setBulletRange 600
setShotCooldown 0
kill
```

`setBulletPenetration` accepts `true`, `false`, `1` or `0`. Note that
`setCriticalDamageCoefficient` sets the critical hit chance, not the
critical damage coefficient. Unknown commands, malformed numbers and
numbers out of range are reported in the console log, and every line
entered is echoed there.

## Using it as a library

The game rules can be driven without opening a window. `Player`
(`obliterator.player`), `Bat`, `Crab` and `Slime`
(`obliterator.enemy_types`), `EnemySpawner` (`obliterator.spawner`),
`BoostersManager` (`obliterator.boosters`), `Console`
(`obliterator.console`) and `MovementManager` (`obliterator.movement`)
work on an ordinary list of game objects. `obliterator.collider` has the
`Rect` and `Collider` types with an axis-aligned overlap test, and
`obliterator.controls.movement_vector_from_keys` turns held keys into a
normalised movement vector.

## What it does not do

There is no sound, no menu screen, no saved scores or settings, and no
game assets in the package itself.

## Running the tests

```
pip install .[test]
pytest
```