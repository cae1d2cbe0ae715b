from securebox.box import SecureBox
from securebox.solver import open_box, unlock
