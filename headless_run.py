from pidsim.app import build_driver, run_headless
from pidsim.driver import Key, KeyDown, PointerDown

# Example headless run: retarget twice, then add some integral action

events = [
    (60, PointerDown(600.0)),
    (240, KeyDown(Key.KI_UP)),
    (300, PointerDown(200.0)),
]

driver = build_driver()
log = run_headless(600, driver, events)

# Print the state once per simulated second
for rec in log[59::60]:
    print(f"t={rec.t:5.2f}s  y={rec.position:7.2f}  v={rec.velocity:8.2f}  target={rec.target:6.1f}")
